"""Generate images for variants that asked for one.

Produces the title → image URL map consumed by the reconciliation engine.
"""
import logging
import re
import uuid
from storefront.services import ai_service, image_service, storage_service

logger = logging.getLogger(__name__)


def _slug(title):
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug[:60] or "variant"


def _reference_image(product):
    if not product.image_storage_key:
        return None
    try:
        return storage_service.download(product.image_storage_key)
    except Exception:
        logger.exception(
            "Could not download reference image %s for product %s",
            product.image_storage_key, product.id,
        )
        return None


def generate_variant_images(product, prompts):
    """Generate, store and publish one image per prompt.

    Args:
        product: Product the variants belong to
        prompts: title → image prompt

    Returns:
        title → public image URL; titles whose generation failed are omitted
    """
    if not prompts:
        return {}

    reference = _reference_image(product)
    images = {}
    for title, prompt in prompts.items():
        try:
            raw = ai_service.generate_variant_image(prompt, reference)
            jpeg = image_service.to_jpeg(raw)
            storage_key = f"variants/{product.id}/{_slug(title)}-{uuid.uuid4().hex[:8]}.jpg"
            storage_service.upload(storage_key, jpeg, private=False)
            images[title] = storage_service.get_public_url(storage_key)
        except Exception:
            logger.exception(
                "Image generation failed for variant %r of product %s", title, product.id
            )
            continue

    logger.info(
        "Generated %d/%d variant images for product %s",
        len(images), len(prompts), product.id,
    )
    return images
