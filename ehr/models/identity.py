"""
Identity resources: the people and organizations other resources point at.

Patient PHI columns are encrypted at rest through ``EncryptedString``;
the medical record number stays plaintext so it can be searched.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Index, String, Uuid

from ehr.config import settings
from ehr.models.database import Base, ResourceMixin
from ehr.services.encryption import EncryptedString, EncryptionService

# Built once from configuration and bound into the column types below
PHI_CIPHER = EncryptionService(settings.PHI_ENCRYPTION_KEY)


class Organization(ResourceMixin, Base):
    __tablename__ = "organization"

    name = Column(String(255), nullable=False)
    type_code = Column(String(30), comment="prov | dept | ins | pay | ...")
    active = Column(Boolean, default=True, nullable=False)
    phone = Column(String(50))
    email = Column(String(255))
    city = Column(String(100))
    part_of_id = Column(Uuid, ForeignKey("organization.id"))


class Practitioner(ResourceMixin, Base):
    __tablename__ = "practitioner"

    family_name = Column(String(100), nullable=False)
    given_name = Column(String(100))
    npi = Column(String(20), comment="US National Provider Identifier")
    specialty_code = Column(String(30))
    specialty_display = Column(String(255))
    active = Column(Boolean, default=True, nullable=False)
    phone = Column(String(50))
    email = Column(String(255))


class Patient(ResourceMixin, Base):
    __tablename__ = "patient"

    mrn = Column(String(64), unique=True, nullable=False, comment="Medical Record Number")
    # PHI fields – encrypted application-side
    name_family = Column(EncryptedString(PHI_CIPHER), nullable=False)
    name_given = Column(EncryptedString(PHI_CIPHER))
    birth_date = Column(EncryptedString(PHI_CIPHER), comment="ISO date, encrypted")
    ssn = Column(EncryptedString(PHI_CIPHER))

    gender = Column(String(16))
    active = Column(Boolean, default=True, nullable=False)
    phone = Column(String(50))
    email = Column(String(255))
    managing_organization_id = Column(Uuid, ForeignKey("organization.id"))

    __table_args__ = (Index("ix_patient_mrn", "mrn"),)
