"""Routes for the marketplace blueprint."""

from flask import g, jsonify

from jamaah.auth.decorators import login_required
from jamaah.error_handlers import translate_errors
from jamaah.extensions import backend

from . import bp
from .forms import ProductForm, ProductImageForm, ReviewForm
from .services import ProductService, ReviewService


@bp.route("/marketplace/<string:product_type>", methods=["GET"])
@translate_errors("Gagal memuat produk")
def list_products(product_type):
    """List ``c2c`` or ``b2c`` products, newest first."""
    return jsonify(ProductService.list(backend.store, product_type))


@bp.route("/marketplace/<string:product_type>", methods=["POST"])
@login_required
@translate_errors("Gagal membuat produk")
def create_product(product_type):
    form = ProductForm.from_json()
    product = ProductService.create(backend.store, g.user, product_type, form.data)
    return jsonify(product), 201


@bp.route("/marketplace/product/<string:product_id>", methods=["GET"])
@translate_errors("Gagal memuat detail produk")
def get_product(product_id):
    return jsonify(ProductService.get(backend.store, product_id))


@bp.route("/upload-product-image", methods=["POST"])
@login_required
@translate_errors("Gagal mengupload gambar")
def upload_product_image():
    """Upload a product photo (multipart field ``image``)."""
    form = ProductImageForm.from_multipart()
    return jsonify(ProductService.upload_image(backend.media, g.user["id"], form.image.data))


@bp.route("/products/<string:product_id>/reviews", methods=["GET"])
@translate_errors("Gagal memuat ulasan")
def list_reviews(product_id):
    return jsonify(ReviewService.list(backend.store, product_id))


@bp.route("/products/<string:product_id>/reviews", methods=["POST"])
@login_required
@translate_errors("Gagal mengirim ulasan")
def create_review(product_id):
    form = ReviewForm.from_json()
    review = ReviewService.create(backend.store, g.user, product_id, form.data)
    return jsonify(review), 201


@bp.route("/products/<string:product_id>/reviews/<string:review_id>", methods=["DELETE"])
@login_required
@translate_errors("Gagal menghapus ulasan")
def delete_review(product_id, review_id):
    ReviewService.delete(backend.store, product_id, review_id, g.user["id"])
    return jsonify({"success": True})
