"""Default community data written by ``flask seed``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from faker import Faker

from .timeline.models import POST_STATUS_PUBLISHED
from .utils import iso_from_ms, now_iso, now_ms

if TYPE_CHECKING:
    from .core.store import KVStore

logger = logging.getLogger(__name__)

INITIALIZED_KEY = "system:initialized"
DEFAULT_INVITATION_CODES = ("MASJID2024", "JAMAAH2024")

HOUR_MS = 3_600_000
DAY_MS = 24 * HOUR_MS


def default_records(today: int) -> dict[str, Any]:
    """Return every seeded record keyed by its store key."""
    records: dict[str, Any] = {}

    for code in DEFAULT_INVITATION_CODES:
        records[f"invitation:{code}"] = {"code": code, "valid": True, "created_at": today}

    records["announcement:1"] = {
        "id": "1",
        "title": "Jadwal Kajian Rutin",
        "content": "Kajian rutin setiap Ahad ba'da Subuh di aula masjid. Terbuka untuk umum.",
        "created_at": today,
        "created_by": "system",
    }

    records["article:1"] = {
        "id": "1",
        "title": "Keutamaan Sedekah di Bulan Ramadhan",
        "excerpt": "Pahala sedekah di bulan Ramadhan berlipat ganda. Mari kita manfaatkan bulan penuh berkah ini...",
        "author": "Ustadz Ahmad Syarif",
        "content": (
            "Bulan Ramadhan adalah bulan yang penuh berkah dan ampunan. Di antara "
            "amalan yang sangat dianjurkan di bulan suci ini adalah sedekah."
        ),
        "created_at": today - 3 * DAY_MS,
    }
    records["article:2"] = {
        "id": "2",
        "title": "Adab Berjamaah di Masjid",
        "excerpt": "Mengenal adab dan tata cara yang baik saat beribadah berjamaah di masjid...",
        "author": "Ustadz Muhammad Hasan",
        "content": (
            "Shalat berjamaah memiliki keutamaan yang sangat besar dalam Islam. "
            "Datang lebih awal, luruskan dan rapatkan shaf, dan jaga kebersihan masjid."
        ),
        "created_at": today - 4 * DAY_MS,
    }

    events = [
        ("1", "Shalat Subuh Berjamaah", "Shalat", 1, "Masjid Al-Ikhlas",
         "Shalat Subuh berjamaah setiap hari"),
        ("2", "Kajian Kitab Tafsir Jalalain", "Kajian", 3, "Aula Masjid Lt. 2",
         "Kajian kitab tafsir Jalalain bersama Ustadz Ahmad"),
        ("3", "Bakti Sosial Ramadhan", "Acara Komunitas", 7, "Masjid Al-Ikhlas",
         "Kegiatan berbagi takjil dan santunan untuk masyarakat sekitar"),
    ]
    for event_id, title, category, in_days, location, description in events:
        records[f"event:{event_id}"] = {
            "id": event_id,
            "title": title,
            "category": category,
            "date": today + in_days * DAY_MS,
            "location": location,
            "description": description,
            "rsvp": [],
            "created_at": today,
            "created_by": "system",
        }

    records["campaign:1"] = {
        "id": "1",
        "title": "Renovasi Masjid",
        "description": "Dana untuk renovasi masjid agar lebih nyaman untuk beribadah.",
        "target_amount": 50_000_000,
        "current_amount": 15_000_000,
        "created_at": today,
    }
    records["campaign:2"] = {
        "id": "2",
        "title": "Santunan Anak Yatim",
        "description": "Bantuan untuk anak yatim dan dhuafa di sekitar masjid.",
        "target_amount": 20_000_000,
        "current_amount": 8_500_000,
        "created_at": today,
    }

    products = [
        ("b2c", "1", "Al-Quran Tajwid Warna A5", 85_000, "Toko Masjid", False),
        ("b2c", "2", "Sajadah Travel Lipat", 65_000, "Toko Masjid", False),
        ("c2c", "1", "Jasa Service Laptop dan PC", 100_000, "Komputer Service Center", False),
        ("c2c", "2", "Kandang Kucing 2 Tingkat", 500_000, "Pet Shop", True),
    ]
    for index, (kind, product_id, name, price, seller, barter) in enumerate(products):
        records[f"product:{kind}:{product_id}"] = {
            "id": product_id,
            "type": kind,
            "name": name,
            "description": name,
            "price": price,
            "images": [],
            "is_barter_allowed": barter,
            "seller_id": f"demo_seller_{kind}_{product_id}",
            "seller_name": seller,
            "created_at": today - index * HOUR_MS,
            "status": "active",
        }

    posts = [
        ("demo_user_1", "Ahmad Fauzi", "Kajian Subuh Hari Ini",
         "Alhamdulillah hari ini mengikuti kajian subuh tentang keutamaan sedekah.", 4),
        ("demo_user_2", "Fatimah Zahra", "Selesai Khataman Al-Quran",
         "Alhamdulillah berhasil khatam Al-Quran hari ini setelah 3 bulan.", 8),
        ("demo_user_3", "Umar Farooq", "Berbagi Takjil di Jalan",
         "Ikut jamaah membagikan takjil gratis untuk pengendara. Semoga bermanfaat.", 12),
    ]
    for user_id, user_name, title, content, hours_ago in posts:
        created = today - hours_ago * HOUR_MS
        post_id = f"{created}_{user_id}"
        records[f"timeline:{post_id}"] = timeline_post(
            post_id, user_id, user_name, title, content, iso_from_ms(created)
        )

    return records


def timeline_post(
    post_id: str, user_id: str, user_name: str, title: str, content: str, created_at: str
) -> dict[str, Any]:
    return {
        "id": post_id,
        "user_id": user_id,
        "user_name": user_name,
        "title": title,
        "content": content,
        "image": None,
        "created_at": created_at,
        "likes": [],
        "comments": [],
        "status": POST_STATUS_PUBLISHED,
    }


def seed_default_data(store: KVStore, today: int | None = None) -> bool:
    """Write the default records once; returns False if already seeded."""
    if store.get(INITIALIZED_KEY):
        logger.info("Default data already initialized")
        return False
    for key, value in default_records(today or now_ms()).items():
        store.set(key, value)
    store.set(INITIALIZED_KEY, True)
    logger.info("Default data initialized successfully")
    return True


def generate_posts(store: KVStore, count: int, seed: int | None = None) -> list[dict[str, Any]]:
    """Write ``count`` fake timeline posts by fake members."""
    fake = Faker("id_ID")
    if seed is not None:
        Faker.seed(seed)
    posts = []
    base = now_ms()
    for i in range(count):
        user_id = f"demo_{fake.user_name()}"
        post_id = f"{base - i}_{user_id}"
        post = timeline_post(
            post_id,
            user_id,
            fake.name(),
            fake.sentence(nb_words=5).rstrip("."),
            fake.paragraph(nb_sentences=3),
            now_iso(),
        )
        store.set(f"timeline:{post_id}", post)
        posts.append(post)
    return posts
