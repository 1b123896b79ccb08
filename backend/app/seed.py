"""Seed the database with demo sites, projects, settings, and candidates.

Idempotent: checks for existing data before inserting.
Run via: python -m app.seed
"""

import asyncio
import random
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session_factory
from app.models.candidate import Candidate, Project, Site
from app.models.enums import EntityType, SettingValueType, Sex
from app.models.system import SystemSetting

# Deterministic demo data across runs
RNG = random.Random(20261016)


# ---------------------------------------------------------------------------
# 1. System Settings
# ---------------------------------------------------------------------------

DEFAULT_SETTINGS = [
    ("study", "recruitmentTarget", "800", SettingValueType.INTEGER, "Overall study recruitment target"),
    ("study", "title", "Demo Study", SettingValueType.STRING, "Study title shown on the dashboard"),
]


async def seed_settings(session: AsyncSession) -> None:
    result = await session.execute(select(SystemSetting).limit(1))
    if result.scalar_one_or_none() is not None:
        print("[settings] Already seeded, skipping.")
        return
    for cat, key, val, vt, desc in DEFAULT_SETTINGS:
        session.add(
            SystemSetting(id=uuid.uuid4(), category=cat, key=key, value=val, value_type=vt, description=desc)
        )
    print(f"  [settings] Seeded {len(DEFAULT_SETTINGS)} system settings.")
    await session.flush()


# ---------------------------------------------------------------------------
# 2. Sites & Projects
# ---------------------------------------------------------------------------

SITES = [
    # (id, name, alias, is_study_site)
    (1, "Data Coordinating Center", "DCC", False),
    (2, "Montreal", "MTL", True),
    (3, "Ottawa", "OTT", True),
    (4, "Rome", "ROM", True),
]

PROJECTS = [
    # (id, name, alias, recruitment_target)
    (1, "Pumpernickel", "PUMP", 400),
    (2, "Rye", "RYE", 250),
    (3, "Challah", "CHAL", None),
]


async def seed_sites_and_projects(session: AsyncSession) -> None:
    result = await session.execute(select(Site).limit(1))
    if result.scalar_one_or_none() is not None:
        print("[sites] Already seeded, skipping.")
        return
    for site_id, name, alias, is_study_site in SITES:
        session.add(Site(id=site_id, name=name, alias=alias, is_study_site=is_study_site))
    for project_id, name, alias, target in PROJECTS:
        session.add(Project(id=project_id, name=name, alias=alias, recruitment_target=target))
    print(f"  [sites] Seeded {len(SITES)} sites and {len(PROJECTS)} projects.")
    await session.flush()


# ---------------------------------------------------------------------------
# 3. Candidates
# ---------------------------------------------------------------------------

CANDIDATES_PER_SITE = 150


async def seed_candidates(session: AsyncSession) -> None:
    result = await session.execute(select(Candidate).limit(1))
    if result.scalar_one_or_none() is not None:
        print("[candidates] Already seeded, skipping.")
        return

    cand_id = 100000
    created = 0
    for site_id, _, alias, _ in SITES:
        for n in range(CANDIDATES_PER_SITE):
            cand_id += 1
            session.add(
                Candidate(
                    id=uuid.uuid4(),
                    cand_id=cand_id,
                    psc_id=f"{alias}{n + 1:04d}",
                    sex=RNG.choices([Sex.FEMALE, Sex.MALE, Sex.OTHER], weights=[48, 48, 4])[0],
                    entity_type=EntityType.SCANNER if n % 50 == 0 else EntityType.HUMAN,
                    is_active=RNG.random() > 0.05,
                    registration_site_id=site_id,
                    registration_project_id=RNG.choice(PROJECTS)[0],
                )
            )
            created += 1
    print(f"  [candidates] Created {created} candidates.")
    await session.flush()


async def run_seed() -> None:
    print("=" * 60)
    print("Recruitment Statistics Database Seeder")
    print("=" * 60)

    async with async_session_factory() as session:
        print("\n[1/3] Seeding system settings...")
        await seed_settings(session)

        print("\n[2/3] Seeding sites and projects...")
        await seed_sites_and_projects(session)

        print("\n[3/3] Seeding candidates...")
        await seed_candidates(session)

        await session.commit()

    print("\n" + "=" * 60)
    print("Seed complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(run_seed())
