# assistant/services.py
import json
import logging
import random
import time

import requests
from django.conf import settings

from .exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)

HF_MAX_ATTEMPTS = 3
DEFAULT_RETRY_AFTER = 10

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DESCRIBE_PROMPT = (
    "Identify the type of produce in the photo and generate a short, catchy 2-3 sentence "
    "product description for an online marketplace. Respond ONLY in valid JSON with this "
    'exact shape:\n{\n  "produce": "<name of produce>",\n  "marketingDescription": "<description>"\n}'
)
FALLBACK_ADJECTIVES = [
    "premium", "farm-fresh", "organic", "flavour-packed", "nutritious",
    "crisp", "hand-picked", "garden-grown",
]

DISEASE_INFO = {
    "Tomato Late blight": {
        "description": (
            "Late blight is a serious fungal disease that can rapidly destroy tomato and potato "
            "plants, causing dark, water-soaked spots on leaves and stems."
        ),
        "treatment": [
            "Remove and destroy all affected plants and leaves immediately. Do not compost.",
            "Apply a targeted copper-based or chlorothalonil-based fungicide.",
            "Improve air circulation by pruning and spacing plants farther apart.",
            "Avoid overhead watering; use a soaker hose at the soil level.",
        ],
        "prevention": [
            "Plant certified disease-resistant varieties.",
            "Ensure proper spacing for good air circulation.",
            "Water at the soil level early in the day.",
            "Apply preventive fungicide treatments before symptoms appear, especially in cool, damp weather.",
            "Rotate crops and avoid planting in the same spot where tomatoes or potatoes grew last year.",
            "Remove all plant debris from the garden at the end of the season.",
        ],
    },
}


class AssistantConfigError(Exception):
    """A provider is called without its credentials configured."""


def split_image(image):
    """
    Returns (data_url, raw_base64) for an image sent either as a data URL
    or as bare base64.
    """
    data_url = image if image.startswith("data:") else f"data:image/jpeg;base64,{image}"
    _, _, raw = data_url.partition(",")
    return data_url, raw


def sleep(seconds):
    time.sleep(seconds)


# -------------------------------------------------
# 1. DISEASE DETECTION
# -------------------------------------------------

def parse_retry_after(value):
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER


def parse_predictions(entries, label_key, score_key):
    """
    Maps provider entries to `{label, score}`, skipping anything that isn't
    an object carrying both keys. Returns None when nothing usable is left.
    """
    if not isinstance(entries, list):
        return None
    predictions = [
        {"label": entry[label_key], "score": entry[score_key]}
        for entry in entries
        if isinstance(entry, dict) and label_key in entry and score_key in entry
    ]
    return predictions or None


def detect_with_huggingface(data_url):
    endpoint = settings.HF_INFERENCE_ENDPOINT
    token = settings.HF_INFERENCE_TOKEN
    if not endpoint or not token:
        raise AssistantConfigError("Hugging Face environment variables not set")

    for attempt in range(1, HF_MAX_ATTEMPTS + 1):
        resp = requests.post(
            endpoint,
            json={"inputs": data_url},
            headers={"Authorization": f"Bearer {token}"},
            timeout=settings.ASSISTANT_HTTP_TIMEOUT,
        )

        if resp.ok:
            predictions = parse_predictions(resp.json(), "label", "score")
            if not predictions:
                logger.warning("Hugging Face returned no usable predictions")
            return predictions

        # 503 means the model is still loading
        if resp.status_code == 503 and attempt < HF_MAX_ATTEMPTS:
            # Never wait longer than a single request may take
            wait = min(parse_retry_after(resp.headers.get("Retry-After")), int(settings.ASSISTANT_HTTP_TIMEOUT))
            logger.info(f"Hugging Face model is loading, retrying in {wait}s (attempt {attempt})")
            sleep(wait)
            continue

        logger.warning(f"Hugging Face request failed with status {resp.status_code}")
        return None

    return None


def detect_with_plant_id(raw_base64):
    api_key = settings.PLANT_ID_API_KEY
    if not api_key:
        raise AssistantConfigError("PLANT_ID_API_KEY environment variable not set")

    resp = requests.post(
        settings.PLANT_ID_ENDPOINT,
        json={"images": [raw_base64]},
        headers={"Api-Key": api_key},
        timeout=settings.ASSISTANT_HTTP_TIMEOUT,
    )
    resp.raise_for_status()

    payload = resp.json()
    if not isinstance(payload, dict):
        logger.warning("Plant.id returned an unexpected payload")
        return None
    suggestions = ((payload.get("result") or {}).get("disease") or {}).get("suggestions") or []
    return parse_predictions(suggestions, "name", "probability")


def enrich(predictions):
    enriched = []
    for prediction in predictions:
        info = DISEASE_INFO.get(prediction["label"])
        enriched.append({**prediction, **info} if info else dict(prediction))
    return enriched


def diagnose(image):
    """
    Runs plant disease detection: Hugging Face first, Plant.id if that
    yields nothing. Raises UpstreamServiceError when both come up empty.
    """
    data_url, raw = split_image(image)

    predictions = None
    try:
        predictions = detect_with_huggingface(data_url)
    except (requests.RequestException, ValueError, KeyError, AssistantConfigError) as e:
        logger.warning(f"Hugging Face inference failed, will try fallback: {e}")

    if not predictions:
        logger.info("Primary detection failed, attempting Plant.id fallback")
        try:
            predictions = detect_with_plant_id(raw)
        except (requests.RequestException, ValueError, KeyError, AssistantConfigError) as e:
            logger.error(f"Plant.id fallback failed: {e}")

    if not predictions:
        raise UpstreamServiceError("Could not analyse the image. Please try again later.")

    return enrich(predictions)


# -------------------------------------------------
# 2. PRODUCT DESCRIPTION
# -------------------------------------------------

def local_description():
    picks = random.sample(FALLBACK_ADJECTIVES, 2)
    return {
        "produce": "Produce",
        "marketingDescription": (
            f"Enjoy our {' & '.join(picks)} produce, harvested at peak ripeness for unbeatable "
            "taste and quality. Perfect for elevating every meal with wholesome goodness."
        ),
    }


def describe_with_gemini(raw_base64):
    api_key = settings.GEMINI_API_KEY
    if not api_key:
        raise AssistantConfigError("GEMINI_API_KEY environment variable not set")

    resp = requests.post(
        GEMINI_URL.format(model=settings.GEMINI_MODEL),
        params={"key": api_key},
        json={
            "contents": [{
                "parts": [
                    {"text": DESCRIBE_PROMPT},
                    {"inline_data": {"mime_type": "image/jpeg", "data": raw_base64}},
                ],
            }],
        },
        timeout=settings.ASSISTANT_HTTP_TIMEOUT,
    )
    resp.raise_for_status()

    candidates = resp.json().get("candidates") or []
    try:
        raw_text = candidates[0]["content"]["parts"][0]["text"].strip()
    except (IndexError, KeyError, TypeError, AttributeError):
        raw_text = ""
    if not raw_text:
        raise ValueError("No response from Gemini")

    try:
        parsed = json.loads(raw_text)
    except ValueError:
        parsed = None
    if not isinstance(parsed, dict) or not parsed.get("produce") or not parsed.get("marketingDescription"):
        # Model ignored the JSON instruction; keep its prose
        return {"produce": "Produce", "marketingDescription": raw_text}

    return {"produce": parsed["produce"], "marketingDescription": parsed["marketingDescription"]}


def describe(image):
    _, raw = split_image(image)
    try:
        return describe_with_gemini(raw)
    except (requests.RequestException, ValueError, AssistantConfigError) as e:
        logger.warning(f"Gemini generation failed, falling back to local generation: {e}")
        return local_description()
