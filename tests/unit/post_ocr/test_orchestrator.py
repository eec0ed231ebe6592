import pytest

from contracts.metrics_dto import Platform
from livecommerce_ocr.domain.events import RecordingSink
from livecommerce_ocr.post_ocr.orchestrator import ExtractionOrchestrator
from livecommerce_ocr.service import detect_and_parse_platform


@pytest.fixture
def orchestrator():
    return ExtractionOrchestrator(events=RecordingSink())


TIKTOK_SCREEN = """
TikTok LIVE Center
GMV Langsung
Rp 1.250.000
GMV Total Rp 3.400.000
Durasi: 2 jam 15 menit
Penonton 1.203
"""

SHOPEE_SCREEN = """
Shopee Live
Penjualan(Rp)
142.350
Pesanan 8
Produk Terjual 11
Durasi Live: 1 jam 30 menit
"""


def test_tiktok_screenshot(orchestrator):
    outcome = orchestrator.parse(TIKTOK_SCREEN)

    assert len(outcome.platforms) == 1
    reading = outcome.platforms[0]
    assert reading.platform == Platform.TIKTOK
    assert reading.parsed_gmv == 1250000
    assert reading.parsed_duration == "2 jam 15 menit"
    assert outcome.primary_platform == Platform.TIKTOK
    assert outcome.is_dual_platform is False
    assert outcome.parsed_gmv == 1250000


def test_shopee_screenshot(orchestrator):
    outcome = orchestrator.parse(SHOPEE_SCREEN)

    assert [r.platform for r in outcome.platforms] == [Platform.SHOPEE]
    assert outcome.parsed_gmv == 142350
    assert outcome.parsed_duration == "1 jam 30 menit"
    assert outcome.platform == Platform.SHOPEE


def test_dual_platform_primary_is_highest_gmv(orchestrator):
    text = "TIKTOK GMV RP 300.000\nSHOPEE PENJUALAN RP 450.000"
    outcome = orchestrator.parse(text)

    assert len(outcome.platforms) == 2
    assert outcome.is_dual_platform is True
    assert outcome.primary_platform == Platform.SHOPEE
    assert [r.parsed_gmv for r in outcome.platforms] == [450000, 300000]
    assert outcome.parsed_gmv == 450000


def test_equal_gmv_keeps_detection_order(orchestrator):
    text = "TIKTOK GMV RP 300.000 SHOPEE PENJUALAN RP 300.000"
    outcome = orchestrator.parse(text)

    assert [r.platform for r in outcome.platforms] == [Platform.TIKTOK, Platform.SHOPEE]
    assert outcome.primary_platform == Platform.TIKTOK


def test_platform_without_gmv_is_dropped(orchestrator):
    # Shopee найден по ключевому слову, но суммы нет
    outcome = orchestrator.parse("TikTok GMV Rp 80.000 Pesanan 3")

    assert [r.platform for r in outcome.platforms] == [Platform.TIKTOK]
    assert outcome.is_dual_platform is False


def test_nothing_found_defaults(orchestrator):
    outcome = orchestrator.parse("Selamat datang di aplikasi")

    assert outcome.platforms == []
    assert outcome.primary_platform == Platform.TIKTOK
    assert outcome.platform == Platform.TIKTOK
    assert outcome.parsed_gmv == 0
    assert outcome.parsed_duration is None
    assert outcome.is_dual_platform is False


def test_empty_text(orchestrator):
    outcome = orchestrator.parse("")
    assert outcome.platforms == []


def test_public_function():
    outcome = detect_and_parse_platform("GMV LANGSUNG RP 500.000 GMV TOTAL RP 2.000.000")
    assert outcome.parsed_gmv == 500000


def test_events_go_to_injected_sink():
    sink = RecordingSink()
    ExtractionOrchestrator(events=sink).parse("GMV Rp 100.000")
    components = {fields.get("component") for _, _, fields in sink.events}
    assert {"PlatformDetector", "TikTokGMV", "Orchestrator"} <= components
