# scripts/smoke.py
"""
Live smoke test for the Etymol lookup pipeline.

Unlike the test suite, this script talks to the real dictionary sites, so it
is the quickest way to notice that one of them changed its markup.

Usage
-----
1. Check the default word for every language:
    $ python scripts/smoke.py

2. Check a specific word and language:
    $ python scripts/smoke.py --word étymologie --lang fr
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path

from dotenv import load_dotenv

from etymol.core.contracts import LanguageCode
from etymol.core.result import EntriesFound, Found, LookupFailed
from etymol.pipelines.lookup import LookupPipeline
from etymol.sources.registry import get_source

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# --------------------------------------------------------------------------- #
# Test Data
# --------------------------------------------------------------------------- #
DEFAULT_WORDS = {
    LanguageCode.SPANISH: "casa",
    LanguageCode.FRENCH: "maison",
    LanguageCode.ENGLISH: "house",
}


def check(pipeline: LookupPipeline, word: str, language: LanguageCode) -> bool:
    """Run one lookup and print a per-source summary. Returns success."""
    print(f"\n🔎 {word!r} ({language.value})")
    try:
        result = pipeline.lookup(word, language)
    except Exception as exc:
        print(f"❌ Pipeline Crashed: {exc}")
        traceback.print_exc()
        return False

    if isinstance(result, Found):
        for source_result in result.etymology.results:
            label = get_source(source_result.source).label
            if source_result.found:
                preview = (source_result.text or "").replace("\n", " ")[:80]
                print(f"  ✅ {label}: {preview}")
            else:
                reason = source_result.error.value if source_result.error else "no text"
                print(f"  ⚠️  {label}: {reason}")
        return True
    if isinstance(result, EntriesFound):
        for entry in result.entries:
            print(f"  ✅ {entry.word}: {len(entry.meanings)} meaning(s)")
        return True
    if isinstance(result, LookupFailed):
        print(f"  ❌ {result.message}")
        return False

    print(f"  ⚠️  {result.kind}")
    return False


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run Etymol Smoke Test")
    parser.add_argument("--word", "-w", type=str, help="Word to look up")
    parser.add_argument("--lang", "-l", type=str, help="Language code: en, es or fr")
    args = parser.parse_args()

    if args.lang:
        language = LanguageCode.parse(args.lang)
        targets = {language: args.word or DEFAULT_WORDS[language]}
    else:
        targets = {lang: args.word or word for lang, word in DEFAULT_WORDS.items()}

    pipeline = LookupPipeline()
    results = [check(pipeline, word, language) for language, word in targets.items()]

    print("\n" + "=" * 60)
    if all(results):
        print("✅ All lookups returned content")
    else:
        print("❌ Some lookups failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
