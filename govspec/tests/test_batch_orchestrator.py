from __future__ import annotations

import pytest

from govspec.core.batch import Category, ManifestEntry, build_manifest, run_batch
from govspec.core.contract import ManifestError
from govspec.core.validation import ViolationCode


def _valid_page():
    return {"sections": [{"section_id": "sec_hero_welcome", "elements": [{"label": "Go", "action": "navigate", "target": "/go"}]}]}


def _invalid_page():
    return {"sections": [{"elements": [{"label": "Open", "action": "modal_open"}]}]}


def _manifest():
    return [
        ("homepage", "Pages", _valid_page()),
        ("contact", "Pages", _invalid_page()),
        ("nav-primary", "Components", {"sections": [{"name": "Nav_Primary"}]}),
    ]


def test_invalid_input_does_not_abort_batch() -> None:
    res = run_batch([("homepage", "Pages", _valid_page()), ("contact", "Pages", _invalid_page())])

    assert [r.page_id for r in res.results] == ["homepage", "contact"]
    assert res.summary.valid_exports == 1
    assert res.summary.invalid_exports == 1
    assert res.summary.all_valid is False
    assert res.result_for("contact").violations[0].code == ViolationCode.UNKNOWN_ACTION


def test_summary_counts_pages_and_components() -> None:
    s = run_batch(_manifest()).summary
    assert s.to_dict() == {
        "totalPages": 2,
        "totalComponents": 1,
        "totalExports": 3,
        "validExports": 2,
        "invalidExports": 1,
        "allValid": False,
    }


def test_all_valid_batch() -> None:
    res = run_batch([("homepage", Category.PAGES, _valid_page())])
    assert res.summary.all_valid is True
    assert res.summary.invalid_exports == 0


def test_empty_manifest() -> None:
    s = run_batch([]).summary
    assert s.total_exports == 0
    assert s.all_valid is True


def test_malformed_input_is_recorded_not_skipped() -> None:
    manifest = _manifest() + [("footer-primary", "Components", {"sections": [1, 2]})]

    res = run_batch(manifest)

    broken = res.result_for("footer-primary")
    assert broken is not None
    assert broken.valid is False
    assert broken.violations[0].code == ViolationCode.MALFORMED_INPUT
    assert res.summary.total_exports == 4
    assert res.summary.invalid_exports == 2
    assert res.summary.total_components == 2


def test_filename_views() -> None:
    res = run_batch(_manifest())
    assert set(res.governed_specs) == {
        "homepage_governed_spec_new.txt",
        "contact_governed_spec_new.txt",
        "nav-primary_governed_spec_new.txt",
    }
    assert res.csv_exports["nav-primary_export.csv"] == res.result_for("nav-primary").csv


def test_repeated_release_batches_produce_identical_hashes() -> None:
    first = run_batch(_manifest())
    second = run_batch(_manifest())

    for a, b in zip(first.results, second.results):
        assert a.metadata.model_hash == b.metadata.model_hash
        assert a.metadata.export_hash == b.metadata.export_hash
        assert a.content == b.content


def test_manifest_coercion_and_errors() -> None:
    entries = build_manifest([("homepage", "pages", {"sections": []})])
    assert entries[0].category is Category.PAGES

    entry = ManifestEntry(identifier="nav", category="Components", tree={})
    assert build_manifest([entry]) == [entry]

    with pytest.raises(ManifestError):
        build_manifest([("a", "Pages", {}), ("a", "Components", {})])
    with pytest.raises(ManifestError):
        build_manifest([("a", "Widgets", {})])
    with pytest.raises(ManifestError):
        build_manifest([("", "Pages", {})])
    with pytest.raises(ManifestError):
        build_manifest([("a", "Pages")])
