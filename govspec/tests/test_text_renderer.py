from __future__ import annotations

from govspec.core.contract import DEFAULT_CONTRACT
from govspec.core.export import render_governed_spec, render_malformed_spec
from govspec.core.normalization import normalize_spec_tree
from govspec.core.validation import validate_spec_tree


def _tree():
    return normalize_spec_tree(
        {
            "sections": [
                {
                    "section_id": "sec_hero_pricing",
                    "action": {"type": "navigate", "target": ""},
                    "elements": [
                        {"label": "Floor plans", "action": "download", "target": "/plans.pdf"},
                        {"children": [{"text": "Chat", "action": "sms"}]},
                    ],
                },
                {"name": "Block_Footer"},
            ]
        }
    )


def _render(tree, contract=DEFAULT_CONTRACT, generated_at=None):
    validation = validate_spec_tree(tree, contract)
    return render_governed_spec(
        tree,
        validation,
        "homepage",
        "Pages",
        model_hash="0123456789abcdef",
        contract=contract,
        generated_at=generated_at,
    )


def test_header_carries_versions_and_model_hash() -> None:
    text = _render(_tree())
    assert text.startswith("=" * 60 + "\nGOVERNED SPEC CONTRACT\n")
    assert "Page: homepage\n" in text
    assert "Category: Pages\n" in text
    assert "Contract Version: GOV-SPEC-V2.0\n" in text
    assert "Schema Version: 1.0\n" in text
    assert "Export Engine: ENGINE-V2.0.0\n" in text
    assert "Build Mode: release\n" in text
    assert "Model Hash: 0123456789abcdef\n" in text


def test_section_blocks_in_order() -> None:
    text = _render(_tree())
    assert text.index("SECTION 01") < text.index("SECTION 02")
    assert "Section ID: section_01\n" in text
    assert "Name: SECTION_01\n" in text
    assert "Semantic Key: pricing\n" in text
    assert "Location: 1\n" in text
    assert "Semantic Key: footer\n" in text
    assert "Elements: 0\n" in text


def test_elements_are_listed_with_outline_numbers() -> None:
    text = _render(_tree())
    assert "    1.1 Floor plans | action: download | target: /plans.pdf\n" in text
    assert "    1.2 (unlabeled)\n" in text
    assert "      1.2.1 Chat | action: sms | target: -\n" in text
    assert "Elements: 3\n" in text


def test_rejected_actions_are_flagged() -> None:
    text = _render(_tree())
    assert "Section Action: navigate | target: - [REJECTED]\n" in text


def test_summary_block() -> None:
    text = _render(_tree())
    assert "Total Subsections: 2\n" in text
    assert "Total Actions: 3\n" in text
    assert "Validation Status: INVALID\n" in text
    assert "Violations: 1\n" in text
    assert "  - [missing_target] navigate requires non-empty target (section_01 at sections[0])\n" in text
    assert text.endswith("=" * 60 + "\n")


def test_summary_lists_counts_only() -> None:
    summary = _render(_tree()).split("\nSUMMARY\n", 1)[1].splitlines()
    assert summary == [
        "=" * 60,
        "Total Subsections: 2",
        "Total Actions: 3",
        "Validation Status: INVALID",
        "Violations: 1",
        "  - [missing_target] navigate requires non-empty target (section_01 at sections[0])",
        "=" * 60,
    ]


def test_rendering_is_pure() -> None:
    assert _render(_tree()) == _render(_tree())


def test_timestamp_only_rendered_in_development() -> None:
    assert "Generated At" not in _render(_tree(), generated_at="2026-01-01T00:00:00+00:00")

    dev = DEFAULT_CONTRACT.with_build_mode("development")
    text = _render(_tree(), contract=dev, generated_at="2026-01-01T00:00:00+00:00")
    assert "Generated At: 2026-01-01T00:00:00+00:00\n" in text


def test_multiline_values_are_collapsed() -> None:
    tree = normalize_spec_tree({"sections": [{"elements": [{"label": "Two\nlines", "action": "toggle"}]}]})
    assert "1.1 Two lines | action: toggle" in _render(tree)


def test_malformed_stand_in_document() -> None:
    text = render_malformed_spec("broken", "Components", "section 1 must be a mapping, got int")
    assert "Page: broken\n" in text
    assert "Validation Status: INVALID\n" in text
    assert "  - [malformed_input] section 1 must be a mapping, got int\n" in text
