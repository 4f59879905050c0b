import pytest
from datetime import date
from pydantic import ValidationError
from app.domain.certificates.schemas import CertificateCreateDTO, CertificatePutDTO, CertificatesQueryDTO, \
    CertificateNumberDTO, CertificateCounterDTO


def create_payload(**override):
    data = {
        "customer_name": "  Acme Refinery ",
        "site_location": "Unit 4",
        "date_of_calibration": "2024-05-10",
        "observations": [{"gas": "CH4 50% LEL", "before": "48", "after": "50"}],
    }
    data.update(override)
    return data


def test_certificate_no_is_optional_on_create():
    dto = CertificateCreateDTO(**create_payload())
    assert dto.certificate_no is None
    assert dto.customer_name == "Acme Refinery"
    assert dto.date_of_calibration == date(2024, 5, 10)


def test_blank_certificate_no_becomes_none():
    dto = CertificateCreateDTO(**create_payload(certificate_no="   "))
    assert dto.certificate_no is None


def test_certificate_no_is_required_on_put():
    with pytest.raises(ValidationError):
        CertificatePutDTO(**create_payload())


def test_observation_rejects_unknown_keys():
    with pytest.raises(ValidationError):
        CertificateCreateDTO(**create_payload(observations=[{"gas": "O2", "during": "20"}]))


def test_missing_customer_name_raises():
    with pytest.raises(ValidationError):
        CertificateCreateDTO(**create_payload(customer_name=" "))


def test_query_rejects_inverted_date_range():
    with pytest.raises(ValidationError) as e:
        CertificatesQueryDTO(date_from="2024-06-01", date_to="2024-05-01")
    assert "date_from must not be after date_to" in str(e.value)


def test_query_rejects_unknown_sort_column():
    with pytest.raises(ValidationError):
        CertificatesQueryDTO(sort_by="password_hash")


def test_certificate_number_serializes_with_camel_case_key():
    dto = CertificateNumberDTO(certificate_number="RPS/CER/24-25/0001")
    assert dto.model_dump(by_alias=True) == {"certificateNumber": "RPS/CER/24-25/0001"}


def test_counter_serializes_with_camel_case_keys():
    dto = CertificateCounterDTO(last_number=7, generated_label="RPS/CER/24-25/0007")
    assert dto.model_dump(by_alias=True) == {"lastNumber": 7, "generatedLabel": "RPS/CER/24-25/0007"}
