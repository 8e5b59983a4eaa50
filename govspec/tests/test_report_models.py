from __future__ import annotations

from govspec.core.batch import run_batch
from govspec.report import BatchSummaryOut, build_batch_report


def test_build_batch_report() -> None:
    result = run_batch(
        [
            ("homepage", "Pages", {"sections": [{"section_id": "sec_hero_pricing"}]}),
            ("nav-primary", "Components", {"sections": [{"action": "navigate"}]}),
        ]
    )

    report = build_batch_report(result)
    dumped = report.model_dump(by_alias=True)

    assert dumped["summary"] == result.summary.to_dict()
    home, nav = report.results
    assert home.status == "VALID"
    assert home.governed_spec_file == "homepage_governed_spec_new.txt"
    assert home.model_hash == result.result_for("homepage").metadata.model_hash
    assert nav.valid is False
    assert nav.violations[0].code == "missing_target"
    assert nav.violations[0].path == "sections[0]"


def test_summary_model_accepts_field_names_and_aliases() -> None:
    by_alias = BatchSummaryOut(
        totalPages=1, totalComponents=0, totalExports=1, validExports=1, invalidExports=0, allValid=True
    )
    by_name = BatchSummaryOut(
        total_pages=1,
        total_components=0,
        total_exports=1,
        valid_exports=1,
        invalid_exports=0,
        all_valid=True,
    )
    assert by_alias == by_name
    assert by_name.model_dump(by_alias=True)["allValid"] is True
