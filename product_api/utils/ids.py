import random

from product_api.config import get_settings

settings = get_settings()

_random = random.SystemRandom()


def generate_product_id() -> int:
    """Return a random candidate id in the configured 6-digit range."""
    return _random.randint(settings.PRODUCT_ID_MIN, settings.PRODUCT_ID_MAX)
