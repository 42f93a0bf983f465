"""Service layer for marketplace products and reviews."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jamaah.core.media import InvalidImageError, normalize_image
from jamaah.core.store import Repository
from jamaah.errors import ForbiddenError, NotFoundError, ValidationError
from jamaah.utils import display_name, new_id, now_ms, sort_newest_first

from .models import PRODUCT_STATUS_ACTIVE, PRODUCT_TYPES

if TYPE_CHECKING:
    from werkzeug.datastructures import FileStorage

    from jamaah.core.media import MediaStorage
    from jamaah.core.store import KVStore
    from jamaah.core.types import Identity

    from .models import Product, Review


class ProductService:
    """Handles business logic and data access for products."""

    @staticmethod
    def _repo(store: KVStore, product_type: str) -> Repository[Product]:
        if product_type not in PRODUCT_TYPES:
            raise ValidationError("Tipe produk tidak valid")
        return Repository(store, f"product:{product_type}:")

    @staticmethod
    def list(store: KVStore, product_type: str) -> list[Product]:
        return sort_newest_first(
            ProductService._repo(store, product_type).list(), "created_at"
        )

    @staticmethod
    def create(
        store: KVStore, identity: Identity, product_type: str, data: dict[str, Any]
    ) -> Product:
        repo = ProductService._repo(store, product_type)
        product_id = new_id()
        product: Product = {
            "id": product_id,
            "type": product_type,
            "name": data["name"],
            "description": data.get("description") or "",
            "price": data["price"],
            "images": data.get("images") or [],
            "is_barter_allowed": bool(data.get("is_barter_allowed")),
            "seller_id": identity["id"],
            "seller_name": display_name(identity),
            "created_at": now_ms(),
            "status": PRODUCT_STATUS_ACTIVE,
        }
        return repo.put(product_id, product)

    @staticmethod
    def get(store: KVStore, product_id: str) -> Product:
        """Look a product up in every listing type."""
        for product_type in PRODUCT_TYPES:
            product = ProductService._repo(store, product_type).get(product_id)
            if product:
                return product
        raise NotFoundError("Produk tidak ditemukan")

    @staticmethod
    def upload_image(
        media: MediaStorage, user_id: str, file: FileStorage
    ) -> dict[str, str]:
        """Re-encode an uploaded image and store it under the seller's folder."""
        try:
            data, content_type = normalize_image(file.read())
        except InvalidImageError as e:
            raise ValidationError(str(e)) from e
        extension = content_type.split("/")[1].replace("jpeg", "jpg")
        path = f"products/{user_id}/{new_id()}.{extension}"
        url = media.upload(path, data, content_type)
        return {"url": url, "path": path}


class ReviewService:
    """Handles product reviews stored under ``review:product:<productId>:``."""

    @staticmethod
    def _repo(store: KVStore, product_id: str) -> Repository[Review]:
        return Repository(store, f"review:product:{product_id}:")

    @staticmethod
    def list(store: KVStore, product_id: str) -> list[Review]:
        return sort_newest_first(ReviewService._repo(store, product_id).list(), "created_at")

    @staticmethod
    def create(
        store: KVStore, identity: Identity, product_id: str, data: dict[str, Any]
    ) -> Review:
        review_id = new_id()
        review: Review = {
            "id": review_id,
            "product_id": product_id,
            "user_id": identity["id"],
            "user_name": display_name(identity),
            "rating": int(data["rating"]),
            "comment": (data.get("comment") or "").strip(),
            "created_at": now_ms(),
        }
        return ReviewService._repo(store, product_id).put(review_id, review)

    @staticmethod
    def delete(store: KVStore, product_id: str, review_id: str, user_id: str) -> None:
        """Delete a review; only its author may."""
        repo = ReviewService._repo(store, product_id)
        review = repo.get(review_id)
        if not review:
            raise NotFoundError("Ulasan tidak ditemukan")
        if review.get("user_id") != user_id:
            raise ForbiddenError("Tidak memiliki izin")
        repo.delete(review_id)
