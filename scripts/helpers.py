import re
import json
import logging

_LOG = logging.getLogger(__name__)

# whole response wrapped in ```json … ``` (or a bare ``` fence)
_FENCE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def extract_clean_json(raw: str | dict | None) -> dict | None:
    """Parse a Gemini JSON reply, tolerating a markdown fence. None on failure."""
    if isinstance(raw, dict):
        return raw
    if not raw:
        return None

    json_str = raw.strip()
    match = _FENCE.match(json_str)
    if match and match.group(2):
        json_str = match.group(2).strip()

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        _LOG.error("Failed to parse JSON response from Gemini: %s", e)
        _LOG.debug("raw response text: %s", raw)
        return None

    if not isinstance(data, dict):
        _LOG.error("Gemini JSON response is %s, expected an object", type(data).__name__)
        return None
    return data
