"""LiveCommerce OCR - метрики live-эфиров TikTok / Shopee со скриншотов."""

from .service import (
    detect_and_parse_platform,
    extract_metrics_from_image,
    is_valid_gmv,
    parse_shopee_duration,
    parse_shopee_gmv,
    parse_tiktok_duration,
    parse_tiktok_gmv,
)

__all__ = [
    "extract_metrics_from_image",
    "detect_and_parse_platform",
    "parse_tiktok_gmv",
    "parse_shopee_gmv",
    "parse_tiktok_duration",
    "parse_shopee_duration",
    "is_valid_gmv",
]
