import pytest

from livecommerce_ocr.domain.events import RecordingSink
from livecommerce_ocr.post_ocr.gmv_extractor import GMVExtractor, is_valid_gmv
from livecommerce_ocr.service import parse_shopee_gmv, parse_tiktok_gmv


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def extractor(sink):
    return GMVExtractor(events=sink)


class TestTikTokChain:
    """Цепочка TikTok: LANGSUNG -> GMV -> максимум Rp."""

    def test_langsung_wins_over_total(self, extractor):
        text = "GMV TOTAL RP 2.000.000\nGMV LANGSUNG RP 500.000"
        assert extractor.extract_tiktok(text) == 500000

    def test_langsung_with_line_breaks_and_colon(self, extractor):
        text = "GMV Langsung:\n Rp 1.250.000"
        assert extractor.extract_tiktok(text) == 1250000

    def test_gmv_label(self, extractor):
        assert extractor.extract_tiktok("Tiktok GMV Rp 300.000 Penonton 120") == 300000

    def test_gmv_label_with_k_suffix(self, extractor):
        assert extractor.extract_tiktok("GMV Rp 12K") == 12000

    def test_ocr_misread_gmy(self, extractor):
        assert extractor.extract_tiktok("GMY Rp 75.000") == 75000

    def test_fallback_max_rupiah(self, extractor):
        text = "Pendapatan Rp 150.000 Komisi Rp 15.000 Rp 99.999"
        assert extractor.extract_tiktok(text) == 150000

    def test_rule_name_logged(self, extractor, sink):
        extractor.extract_tiktok("GMV LANGSUNG RP 500.000")
        assert any("gmv_langsung" in m for m in sink.messages("info"))

    def test_not_found_is_none(self, extractor):
        assert extractor.extract_tiktok("Tidak ada angka") is None

    def test_zero_amount_is_not_found(self, extractor):
        assert extractor.extract_tiktok("GMV Rp 0") is None


class TestShopeeChain:
    """Цепочка Shopee: метка PENJUALAN и её fallback-варианты."""

    @pytest.mark.parametrize("text", [
        "PENJUALAN(RP) 142.350",
        "PENJUALAN RP 142.350",
        "Penjualan (Rp) 142.350",
        "Penjualan(Rp)\n142.350",
    ])
    def test_label_variants(self, extractor, text):
        assert extractor.extract_shopee(text) == 142350

    def test_number_after_penjualan(self, extractor):
        assert extractor.extract_shopee("Penjualan\n2.450.000 Pesanan 12") == 2450000

    def test_small_number_after_penjualan_rejected(self, extractor):
        # 12 - количество, не выручка; RP-сумм нет
        assert extractor.extract_shopee("Penjualan 12 pesanan") is None

    def test_produk_terjual_max_rupiah(self, extractor):
        text = "Produk Terjual 35 Rp 500 Rp 1.200.000 Rp 800.000"
        assert extractor.extract_shopee(text) == 1200000

    def test_penjualan_max_rupiah_last_resort(self, extractor):
        # Число сразу после PENJUALAN - количество, суммы дальше
        text = "Penjualan 7 produk ............................................ Rp 800.000 Rp 950.000"
        assert extractor.extract_shopee(text) == 950000

    def test_rupiah_without_penjualan_is_contamination(self, extractor, sink):
        assert extractor.extract_shopee("Shopee Pesanan 4 Rp 500.000") is None
        assert any("PENJUALAN" in m for m in sink.messages("warning"))

    def test_threshold_is_tunable(self, sink):
        extractor = GMVExtractor(events=sink, shopee_min_gmv=10)
        assert extractor.extract_shopee("Penjualan 12 pesanan") == 12


def test_parse_functions_return_zero_when_not_found():
    assert parse_tiktok_gmv("hello") == 0
    assert parse_shopee_gmv("hello") == 0


def test_parse_functions_return_values():
    assert parse_tiktok_gmv("GMV Rp 300.000") == 300000
    assert parse_shopee_gmv("Penjualan Rp 450.000") == 450000


@pytest.mark.parametrize("gmv, expected", [
    (0, False),
    (-5, False),
    (None, False),
    (15_000_000_000, False),
    (10_000_000_000, False),
    (500_000, True),
    (1, True),
])
def test_is_valid_gmv(gmv, expected):
    assert is_valid_gmv(gmv) is expected
