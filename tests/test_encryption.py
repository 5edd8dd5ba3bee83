"""Tests for the PHI encryption service and the encrypted column type."""

from cryptography.fernet import Fernet
from sqlalchemy import text

from ehr.services.encryption import EncryptedString, EncryptionService


def test_encrypt_decrypt_roundtrip():
    svc = EncryptionService()
    original = "John Doe, DOB 1985-03-22, SSN 123-45-6789"
    encrypted = svc.encrypt(original)

    assert encrypted != original  # not stored in plaintext
    assert svc.decrypt(encrypted) == original


def test_empty_string_passthrough():
    svc = EncryptionService()
    assert svc.encrypt("") == ""
    assert svc.decrypt("") == ""


def test_explicit_key_is_used():
    key = Fernet.generate_key().decode()
    token = EncryptionService(key).encrypt("secret")
    assert Fernet(key.encode()).decrypt(token.encode()) == b"secret"


def test_column_type_uses_its_bound_cipher():
    key = Fernet.generate_key().decode()
    column_type = EncryptedString(EncryptionService(key))

    stored = column_type.process_bind_param("Doe", dialect=None)
    assert Fernet(key.encode()).decrypt(stored.encode()) == b"Doe"
    assert column_type.process_result_value(stored, dialect=None) == "Doe"
    assert column_type.process_bind_param(None, dialect=None) is None


def test_patient_phi_is_ciphertext_at_rest(db, patient):
    row = db.execute(
        text("SELECT name_family, birth_date, ssn, mrn FROM patient WHERE mrn = :mrn"), {"mrn": "MRN-001"}
    ).one()

    assert row.name_family != "Doe"
    assert row.birth_date != "1990-01-15"
    assert row.ssn is None  # absent PHI stays NULL
    assert row.mrn == "MRN-001"

    db.expire_all()
    assert db.get(type(patient), patient.id).name_family == "Doe"
