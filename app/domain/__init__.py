from .associations import user_roles
from .users.models import User, Role
from .auth.models import AuthRefreshSession
from .companies.models import Company
from .contacts.models import ContactPerson
from .certificates.models import Certificate
from .certificates.counters import certificate_counters
from .service_reports.models import ServiceReport
from .catalog.models import Category, Engineer

__all__ = (
    "user_roles", "User", "Role", "AuthRefreshSession", "Company", "ContactPerson", "Certificate",
    "certificate_counters", "ServiceReport", "Category", "Engineer"
)
