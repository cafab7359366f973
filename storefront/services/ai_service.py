import io
import google.generativeai as genai
from PIL import Image as PILImage
from flask import current_app


VARIANT_PROMPT = """Edit the reference product photograph to show this variant:

{prompt}

REQUIREMENTS, product fidelity:
- Keep the product's shape, proportions, materials and construction identical
- Change only what the variant description asks for (color, pattern, finish)
- Keep the same camera angle, framing, lighting and plain studio backdrop

NEGATIVE CONSTRAINTS, strictly avoid:
- No invented logos, text, watermarks, or brand names
- No extra products, props, or background objects
- No artistic filters or stylization"""

STANDALONE_PROMPT = """Generate a photorealistic studio product photograph.

{prompt}

- Plain off-white backdrop, soft diffused lighting, product centered
- No text, logos, watermarks, people, or background objects"""


def configure():
    """Configure Gemini with API key."""
    genai.configure(api_key=current_app.config["GEMINI_API_KEY"])


def generate_variant_image(prompt, reference_image_bytes=None):
    """Generate a variant image from a text prompt.

    Args:
        prompt: description of the variant, e.g. "Product in red"
        reference_image_bytes: optional photo of the base product to edit

    Returns:
        bytes of the generated image (as returned by the model)

    Raises:
        RuntimeError when the model returns no image
    """
    configure()

    model = genai.GenerativeModel(current_app.config["GEMINI_IMAGE_MODEL"])

    if reference_image_bytes:
        reference = PILImage.open(io.BytesIO(reference_image_bytes))
        if reference.mode != "RGB":
            reference = reference.convert("RGB")
        contents = [VARIANT_PROMPT.format(prompt=prompt), reference]
    else:
        contents = [STANDALONE_PROMPT.format(prompt=prompt)]

    response = model.generate_content(
        contents,
        generation_config=genai.GenerationConfig(
            response_mime_type="image/jpeg",
        ),
    )

    if not response.candidates:
        raise RuntimeError("Gemini returned no candidates")

    for part in response.candidates[0].content.parts:
        if hasattr(part, "inline_data") and part.inline_data:
            return part.inline_data.data

    raise RuntimeError("Gemini response did not contain an image")
