"""
Idempotent schema creation and seeding.

Every step is create-if-missing or insert-if-missing, so running the
initializer twice leaves the database exactly as running it once.
"""

import logging
import threading
from typing import TYPE_CHECKING

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session, sessionmaker

from youth_cms.core.security import hash_password
from youth_cms.models import Base, Branch, SiteContent, User, UserRole
from youth_cms.models.site_content import SITE_CONTENT_ID

if TYPE_CHECKING:
    from youth_cms.core.config import Settings

logger = logging.getLogger(__name__)

BOOTSTRAP_DISPLAY_NAME = "مدير عام"

SEED_SITE_CONTENT = {
    "organization_name": "شؤون الشباب",
    "slogan": "جيل شبابي متمكن وقوي",
    "definition_text": (
        "مؤسسة رسمية وطنية تُعنى بتمكين الشباب فكرياً وسياسياً واجتماعياً "
        "لصناعة جيل واعٍ يسهم في بناء وطنه."
    ),
    "vision_text": (
        "الريادة في صناعة جيل شبابي متمكن فكرياً، مؤهل سياسياً، فاعل اجتماعياً، "
        "ومعتز بهويته."
    ),
    "mission_text": (
        "النهوض بالشباب عبر تنمية الوعي ورفع الكفاءة المعرفية والمهارات القيادية "
        "ليكون شريكاً حقيقياً في صناعة القرار وبناء الدولة."
    ),
    "goals_text": (
        "1) تنمية الشباب تنمية شاملة\n"
        "2) إعداد جيل قيادي ومبادر\n"
        "3) حماية الهوية الثقافية\n"
        "4) تعزيز العمل التطوعي\n"
        "5) إبراز الرموز الشبابية السورية"
    ),
    "volunteer_form_url": "https://forms.google.com",
}

SEED_BRANCHES = (
    {
        "name": "شؤون الشباب - دمشق",
        "governorate": "دمشق",
        "address": "دمشق - المزة",
        "phone": "0933000001",
        "whatsapp": "0933000001",
    },
    {
        "name": "شؤون الشباب - حلب",
        "governorate": "حلب",
        "address": "حلب - الجميلية",
        "phone": "0933000002",
        "whatsapp": "0933000002",
    },
)


def seed_database(session: Session, settings: "Settings") -> dict[str, int]:
    """
    Insert the site content row, the seed branches and the bootstrap superadmin
    when they are missing. Returns how many rows of each kind were inserted.
    """
    inserted = {"site_content": 0, "branches": 0, "superadmins": 0}

    if session.get(SiteContent, SITE_CONTENT_ID) is None:
        session.add(SiteContent(id=SITE_CONTENT_ID, **SEED_SITE_CONTENT))
        inserted["site_content"] = 1

    for seed in SEED_BRANCHES:
        existing = session.scalars(
            select(Branch.id).where(Branch.name == seed["name"]).limit(1)
        ).first()
        if existing is None:
            session.add(Branch(**seed))
            inserted["branches"] += 1

    superadmin = session.scalars(
        select(User.id).where(User.role == UserRole.SUPERADMIN.value).limit(1)
    ).first()
    username = settings.BOOTSTRAP_SUPERADMIN_USERNAME
    username_taken = session.scalars(
        select(User.id).where(User.username == username).limit(1)
    ).first() is not None
    if superadmin is not None:
        logger.debug("Superadmin present; bootstrap account not needed")
    elif username_taken:
        # Startup continues; the lone-superadmin invariant is restored by hand.
        logger.error(
            "No superadmin exists and username '%s' is held by another account; "
            "set BOOTSTRAP_SUPERADMIN_USERNAME to a free name or create one with "
            "youth_cms.scripts.create_user.",
            username,
        )
    else:
        session.add(
            User(
                username=username,
                display_name=BOOTSTRAP_DISPLAY_NAME,
                password_hash=hash_password(
                    settings.BOOTSTRAP_SUPERADMIN_PASSWORD.get_secret_value()
                ),
                role=UserRole.SUPERADMIN.value,
                branch_id=None,
            )
        )
        inserted["superadmins"] = 1
        if settings.APP_ENV == "prod":
            logger.warning(
                "Created bootstrap superadmin '%s'; change its password now.",
                settings.BOOTSTRAP_SUPERADMIN_USERNAME,
            )

    session.commit()
    return inserted


def initialize_database(engine: Engine, settings: "Settings") -> dict[str, int]:
    """Create missing tables, then seed. Safe to call repeatedly."""
    Base.metadata.create_all(bind=engine, checkfirst=True)
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        inserted = seed_database(session, settings)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
    logger.info(
        "Database initialized: site_content=%s branches=%s superadmins=%s inserted",
        inserted["site_content"],
        inserted["branches"],
        inserted["superadmins"],
    )
    return inserted


class DatabaseInitializer:
    """
    Runs initialize_database at most once per instance.

    Owned by the application lifespan; the lock only makes the guard exact,
    a second run would be harmless anyway.
    """

    def __init__(self, engine: Engine, settings: "Settings") -> None:
        self._engine = engine
        self._settings = settings
        self._lock = threading.Lock()
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def run_once(self) -> bool:
        """Initialize if not yet done. Returns True when this call did the work."""
        with self._lock:
            if self._done:
                return False
            initialize_database(self._engine, self._settings)
            self._done = True
            return True
