"""Validate change-set payloads before they reach the reconciliation engine.

Expected shape (JSON):

    {
      "options": [
        {"action": "create", "option_type": "Color"},
        {"action": "update", "id": 12, "option_type": "Size"}
      ],
      "variants": [
        {
          "title": "Red - Large",
          "option_values": {"Color": "Red", "Size": "Large"},
          "generate_image": true,
          "image_prompt": "Product in red"
        }
      ]
    }
"""

VALID_ACTIONS = {"create", "update"}


def parse_change_set(payload):
    """Return a normalized change-set dict.

    Raises:
        ValueError with a message safe to show to the caller
    """
    if not isinstance(payload, dict):
        raise ValueError("Change-set must be a JSON object.")

    raw_options = _list_or_empty(payload.get("options"))
    raw_variants = _list_or_empty(payload.get("variants"))
    if not isinstance(raw_options, list):
        raise ValueError("'options' must be a list.")
    if not isinstance(raw_variants, list):
        raise ValueError("'variants' must be a list.")

    return {
        "options": [_parse_option(raw, i) for i, raw in enumerate(raw_options)],
        "variants": [_parse_variant(raw, i) for i, raw in enumerate(raw_variants)],
    }


def image_prompts(change_set):
    """Map variant title → image prompt for variants that want an image."""
    return {
        variant["title"]: variant["image_prompt"] or variant["title"]
        for variant in change_set["variants"]
        if variant["generate_image"]
    }


def _parse_option(raw, index):
    field = f"options[{index}]"
    if not isinstance(raw, dict):
        raise ValueError(f"{field} must be an object.")

    action = raw.get("action", "create")
    if action not in VALID_ACTIONS:
        raise ValueError(f"{field}.action must be 'create' or 'update'.")

    label = raw.get("option_type", raw.get("label"))
    option_id = raw.get("id")

    return {
        "action": action,
        "id": _parse_id(option_id, f"{field}.id") if option_id is not None else None,
        "option_type": _clean_text(label, f"{field}.option_type"),
    }


def _parse_variant(raw, index):
    field = f"variants[{index}]"
    if not isinstance(raw, dict):
        raise ValueError(f"{field} must be an object.")

    raw_values = raw.get("option_values", raw.get("optionValues"))
    if raw_values is None:
        raw_values = {}
    if not isinstance(raw_values, dict):
        raise ValueError(f"{field}.option_values must be an object.")

    option_values = {}
    for label, value in raw_values.items():
        label = _clean_text(label, f"{field}.option_values key")
        option_values[label] = _clean_text(
            _scalar_text(value), f"{field}.option_values[{label!r}]"
        )

    image_prompt = raw.get("image_prompt", raw.get("imagePrompt"))
    if image_prompt is not None and not isinstance(image_prompt, str):
        raise ValueError(f"{field}.image_prompt must be a string.")

    return {
        "title": _clean_text(raw.get("title"), f"{field}.title"),
        "option_values": option_values,
        "generate_image": bool(raw.get("generate_image", raw.get("generateImage", False))),
        "image_prompt": image_prompt.strip() if image_prompt else None,
    }


def _list_or_empty(raw):
    # only a missing key or null means "none"; {} or "" must fail the list check
    return [] if raw is None else raw


def _parse_id(raw, field):
    if isinstance(raw, bool):
        raise ValueError(f"{field} must be an integer id.")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    raise ValueError(f"{field} must be an integer id.")


def _scalar_text(value):
    # AI producers sometimes emit sizes as numbers (e.g. {"Size": 42})
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _clean_text(value, field):
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string.")
    value = value.strip()
    if not value:
        raise ValueError(f"{field} must not be empty.")
    return value
