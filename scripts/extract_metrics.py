#!/usr/bin/env python3
"""
Точка входа: метрики live-эфира со скриншотов TikTok / Shopee.

Использование:
    # Один файл
    python scripts/extract_metrics.py data/input/live.jpg

    # Несколько файлов и URL параллельно
    python scripts/extract_metrics.py a.jpg b.png https://example.com/live.jpg

    # Сохранить конверты в data/output/metrics_results.json
    python scripts/extract_metrics.py a.jpg b.png --save

    # Только разбор уже распознанного текста (без OCR)
    python scripts/extract_metrics.py --text ocr_output.txt
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from loguru import logger

from config.settings import OUTPUT_DIR, validate_config
from contracts.metrics_dto import ExtractionRequest
from livecommerce_ocr.application.factory import MetricsComponentFactory


def build_request(source: str) -> ExtractionRequest:
    if source.startswith(("http://", "https://")):
        return ExtractionRequest(image_url=source)
    return ExtractionRequest(image_path=source)


def save_results(results: Dict[str, Any], output_dir: Path = OUTPUT_DIR) -> Path:
    """Сохраняет конверты {источник: конверт} в output_dir/metrics_results.json."""
    output_dir.mkdir(parents=True, exist_ok=True)
    result_file = output_dir / "metrics_results.json"
    with open(result_file, 'w', encoding='utf-8') as f:
        json.dump(results, f, ensure_ascii=False, indent=2)
    return result_file


async def run_ocr(sources: List[str], save: bool = False) -> int:
    """Распознаёт все источники параллельно и печатает JSON конверты."""
    invoker = MetricsComponentFactory.create_invoker()
    results = await invoker.extract_many([build_request(s) for s in sources])

    envelopes = {}
    failed = 0
    for source, result in zip(sources, results):
        envelopes[source] = result.to_dict()
        print(f"\n[{source}]")
        print(json.dumps(envelopes[source], ensure_ascii=False, indent=2))
        if not result.success:
            failed += 1

    if save:
        print(f"\n  [SAVED] Результаты: {save_results(envelopes)}")

    print("\n" + "=" * 60)
    print(f"  ИТОГИ: {len(sources) - failed}/{len(sources)} успешно обработано")
    return 1 if failed else 0


def run_text(text_file: Path) -> int:
    """Разбирает сохранённый текст OCR без обращения к OCR.space."""
    orchestrator = MetricsComponentFactory.create_orchestrator()
    outcome = orchestrator.parse(text_file.read_text(encoding="utf-8"))
    print(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
    return 0


def main():
    """Главная функция запуска."""
    parser = argparse.ArgumentParser(description="LiveCommerce OCR: GMV и длительность эфира")
    parser.add_argument("sources", nargs="*", help="Пути к скриншотам или URL")
    parser.add_argument("--text", help="Файл с уже распознанным текстом OCR")
    parser.add_argument("--save", action="store_true", help=f"Сохранить результаты в {OUTPUT_DIR}")
    parser.add_argument("--verbose", action="store_true", help="Подробный лог (DEBUG)")
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    if args.text:
        text_file = Path(args.text)
        if not text_file.is_file():
            print(f"[ERROR] Файл не найден: {text_file}")
            sys.exit(1)
        sys.exit(run_text(text_file))

    if not args.sources:
        parser.print_help()
        sys.exit(1)

    try:
        validate_config()
    except ValueError as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    sys.exit(asyncio.run(run_ocr(args.sources, save=args.save)))


if __name__ == "__main__":
    main()
