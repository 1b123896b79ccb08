"""Candidate registry models: sites, projects, and candidates."""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, LookupModel, enum_column
from app.models.enums import EntityType, Sex


class Site(LookupModel):
    __tablename__ = "site"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    alias: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    is_study_site: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true", nullable=False
    )

    # Relationships
    candidates: Mapped[list["Candidate"]] = relationship(back_populates="registration_site")


class Project(LookupModel):
    __tablename__ = "project"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    alias: Mapped[str] = mapped_column(String(4), unique=True, nullable=False)
    recruitment_target: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Relationships
    candidates: Mapped[list["Candidate"]] = relationship(back_populates="registration_project")


class Candidate(BaseModel):
    __tablename__ = "candidate"

    cand_id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    psc_id: Mapped[str] = mapped_column(String(255), nullable=False)
    sex: Mapped[Sex | None] = mapped_column(enum_column(Sex, 10), nullable=True)
    entity_type: Mapped[EntityType] = mapped_column(
        enum_column(EntityType, 10), default=EntityType.HUMAN, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true", nullable=False
    )
    registration_site_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("site.id"), nullable=False
    )
    registration_project_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("project.id"), nullable=True
    )

    # Relationships
    registration_site: Mapped["Site"] = relationship(back_populates="candidates")
    registration_project: Mapped["Project"] = relationship(back_populates="candidates")

    __table_args__ = (
        Index("ix_candidate_psc_id", "psc_id"),
        Index("ix_candidate_registration_site", "registration_site_id"),
        Index("ix_candidate_registration_project", "registration_project_id"),
    )
