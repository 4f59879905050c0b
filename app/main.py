from fastapi import FastAPI
from app.api.exceptions import register_error_handler
from app.api.v1.routes import (auth, users, companies, contact_persons, certificates, certificate_numbers,
                               service_reports, categories, engineers)
from app.core.logging_setup import configure_logging
from app.core.middleware.http_ctx import HttpContextMiddleware
from app.core.redis import create_redis


async def lifespan(app: FastAPI):
    configure_logging()
    r = await create_redis()
    app.state.redis = r
    try:
        yield
    finally:
        if r is not None:
            await r.aclose()


app = FastAPI(title="Calibration API", lifespan=lifespan)
app.add_middleware(HttpContextMiddleware, request_id_header="X-Request-ID")
register_error_handler(app)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(companies.router)
app.include_router(contact_persons.router)
app.include_router(certificates.router)
app.include_router(certificate_numbers.router)
app.include_router(service_reports.router)
app.include_router(categories.router)
app.include_router(engineers.router)
