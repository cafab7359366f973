"""Tests for variant image generation (AI and storage mocked)."""
from unittest.mock import patch

from storefront.services import variant_image_service


def test_no_prompts_skips_generation(app, product):
    with patch("storefront.services.variant_image_service.ai_service") as mock_ai:
        assert variant_image_service.generate_variant_images(product, {}) == {}
    mock_ai.generate_variant_image.assert_not_called()


def test_failed_title_is_left_out(app, db, product):
    def fake_generate(prompt, reference):
        if "blue" in prompt:
            raise RuntimeError("Gemini returned no candidates")
        return b"raw"

    with patch("storefront.services.variant_image_service.ai_service") as mock_ai, patch(
        "storefront.services.variant_image_service.image_service"
    ) as mock_img, patch(
        "storefront.services.variant_image_service.storage_service"
    ) as mock_storage:
        mock_ai.generate_variant_image.side_effect = fake_generate
        mock_img.to_jpeg.return_value = b"jpeg"
        mock_storage.get_public_url.side_effect = lambda key: f"https://cdn/{key}"

        images = variant_image_service.generate_variant_images(
            product, {"Red Tee": "in red", "Blue Tee": "in blue"}
        )

    assert list(images) == ["Red Tee"]
    assert images["Red Tee"].startswith(f"https://cdn/variants/{product.id}/red-tee-")
    mock_storage.upload.assert_called_once()
    assert mock_storage.upload.call_args.kwargs["private"] is False
    # no reference photo on the product
    mock_storage.download.assert_not_called()


def test_reference_photo_is_passed_to_model(app, db, product):
    product.image_storage_key = "products/1/base.jpg"
    db.session.commit()

    with patch("storefront.services.variant_image_service.ai_service") as mock_ai, patch(
        "storefront.services.variant_image_service.image_service"
    ), patch("storefront.services.variant_image_service.storage_service") as mock_storage:
        mock_storage.download.return_value = b"reference"
        variant_image_service.generate_variant_images(product, {"Red": "in red"})

    mock_ai.generate_variant_image.assert_called_once_with("in red", b"reference")
