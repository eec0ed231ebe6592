from livecommerce_ocr.domain.events import RecordingSink
from livecommerce_ocr.post_ocr.rule_chain import (
    ExtractionRule,
    RuleChain,
    greater_than,
    is_positive,
)


def _const(value):
    return lambda text: value


def test_first_accepted_rule_wins():
    calls = []

    def tracked(value):
        def extract(text):
            calls.append(value)
            return value
        return extract

    chain = RuleChain("Test", [
        ExtractionRule("first", tracked(None)),
        ExtractionRule("second", tracked(5.0), is_positive),
        ExtractionRule("third", tracked(9.0), is_positive),
    ], RecordingSink())

    match = chain.run("text")
    assert match.rule == "second"
    assert match.value == 5.0
    # Третье правило не вызывается
    assert calls == [None, 5.0]


def test_rejected_value_falls_through():
    chain = RuleChain("Test", [
        ExtractionRule("small", _const(12.0), greater_than(1000)),
        ExtractionRule("big", _const(5000.0), greater_than(1000)),
    ], RecordingSink())
    assert chain.run("x").rule == "big"


def test_failing_rule_is_skipped():
    sink = RecordingSink()

    def broken(text):
        raise ValueError("boom")

    chain = RuleChain("Test", [
        ExtractionRule("broken", broken),
        ExtractionRule("ok", _const("1 jam")),
    ], sink)

    assert chain.run("x").value == "1 jam"
    assert any("broken" in m for m in sink.messages("warning"))


def test_no_match_returns_none():
    sink = RecordingSink()
    chain = RuleChain("Test", [ExtractionRule("none", _const(None))], sink)
    assert chain.run("x") is None
    assert sink.messages("warning")


def test_rule_names():
    chain = RuleChain("Test", [ExtractionRule("a", _const(1)), ExtractionRule("b", _const(2))])
    assert chain.rule_names == ("a", "b")
