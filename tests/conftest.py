"""Shared pytest fixtures for the AlgoPath test suite."""

import json
import pytest

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import AppConfig
from content import FileContentSource
from models import ContentItem, LocaleBundle


@pytest.fixture
def detailed_raw() -> dict:
    """A nested problem record with two quizzes, code and annotations."""
    return {
        "id": "two-sum",
        "title": "Two Sum",
        "difficulty": "easy",
        "tags": ["array", "hash-map"],
        "leetcode_url": "https://leetcode.com/problems/two-sum/",
        "content": {
            "problem_statement": "Find two numbers that add up to `target`.",
            "explanation": {
                "understanding_the_problem": "We need **two distinct positions**.",
                "brute_force": "Check every pair.",
                "bottleneck": "That is O(n^2).",
                "optimized_approach": "Remember what you have seen.",
                "algorithm_steps": "1. Build a map\n2. Look up the partner",
            },
            "quizzes": [
                {
                    "question": "What makes the naive approach slow?",
                    "options": ["Sorting", "Comparing every pair", "Recursion"],
                    "correct": 1,
                },
                {
                    "question": "What do we look up?",
                    "options": ["target - value", "value * 2"],
                    "correct": 0,
                },
            ],
        },
        "code": {
            "javascript": {
                "solution": "function twoSum(nums, target) {\n  const seen = new Map();\n  return [];\n}",
                "annotations": [{"lines": [2], "text": "Value to index"}],
            }
        },
        "complexity": {
            "time": "O(n)",
            "space": "O(n)",
            "explanation_time": "One pass.",
            "explanation_space": "The map.",
        },
    }


@pytest.fixture
def legacy_raw() -> dict:
    """A flat legacy problem record."""
    return {
        "id": "contains-duplicate",
        "title": "Contains Duplicate",
        "difficulty": "easy",
        "tags": ["array"],
        "description": "Return true if any value appears twice.",
        "complexity": {"time": "O(n)", "space": "O(n)"},
        "code": "return new Set(nums).size !== nums.length;",
        "insight": "Compare set size with array length.",
    }


@pytest.fixture
def detailed_item(detailed_raw) -> ContentItem:
    return ContentItem.from_raw(detailed_raw)


@pytest.fixture
def legacy_item(legacy_raw) -> ContentItem:
    return ContentItem.from_raw(legacy_raw)


@pytest.fixture
def en_meta() -> dict:
    """English locale bundle: full UI strings and one category of three problems."""
    return {
        "ui": {
            "problem": {
                "codeTitle": "Code Implementation",
                "checkAnswer": "Check Answer",
            },
            "quiz": {"correct": "Correct!", "tryAgain": "Try again!"},
            "search": {"noResults": "No problems found"},
            "labels": {"problems": "Problems"},
        },
        "categories": {
            "arrays": {
                "name": "Arrays & Hashing",
                "shortName": "Arrays",
                "description": "Linear data.",
                "problemIds": ["two-sum", "three-sum", "contains-duplicate"],
                "stats": {"priority": "High", "metric": "O(n)", "metricLabel": "Typical Time"},
            }
        },
        "problemTitles": {},
    }


@pytest.fixture
def ua_meta() -> dict:
    """Partial Ukrainian bundle: a few strings and one title override."""
    return {
        "ui": {
            "quiz": {"correct": "Правильно!"},
            "labels": {"problems": "Задачі"},
        },
        "categories": {
            "arrays": {
                "name": "Масиви",
                "problemIds": ["two-sum", "three-sum", "contains-duplicate"],
            }
        },
        "problemTitles": {"two-sum": "Дві суми"},
    }


@pytest.fixture
def en_bundle(en_meta) -> LocaleBundle:
    return LocaleBundle.model_validate({**en_meta, "locale": "en"})


@pytest.fixture
def ua_bundle(ua_meta, en_bundle) -> LocaleBundle:
    bundle = LocaleBundle.model_validate({**ua_meta, "locale": "ua"})
    return bundle.attach_parent(en_bundle)


@pytest.fixture
def write_json(tmp_path):
    """Write JSON documents below tmp_path; returns the root directory."""

    def _write(relative_path: str, data) -> Path:
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def content_dir(write_json, tmp_path, en_meta, ua_meta, detailed_raw, legacy_raw) -> Path:
    """A content tree with en and ua bundles and three English problems.

    Only ``two-sum`` has a Ukrainian version; the others fall back to English.
    """
    three_sum = {
        **detailed_raw,
        "id": "three-sum",
        "title": "Three Sum",
        "difficulty": "medium",
    }
    ua_two_sum = {
        **detailed_raw,
        "title": "Дві суми (UA)",
    }

    write_json("en/meta.json", en_meta)
    write_json("ua/meta.json", ua_meta)
    write_json("en/problems/arrays/two-sum.json", detailed_raw)
    write_json("en/problems/arrays/three-sum.json", three_sum)
    write_json("en/problems/arrays/contains-duplicate.json", legacy_raw)
    write_json("ua/problems/arrays/two-sum.json", ua_two_sum)
    return tmp_path


@pytest.fixture
def file_source(content_dir) -> FileContentSource:
    return FileContentSource(content_dir)


@pytest.fixture
def app_config(content_dir, tmp_path) -> AppConfig:
    return AppConfig(
        data_dir=content_dir,
        db_path=tmp_path / "prefs.db",
        startup_locale="en",
    )
