import pytest

from impressflow.frontmatter import extract_frontmatter
from impressflow.slide_models import Frontmatter


def test_extracts_known_keys_and_body():
    content = "---\ntitle: Test\ntheme: tech-dark\n---\n# Slide 1\ntext"

    frontmatter, body = extract_frontmatter(content)

    assert frontmatter.title == "Test"
    assert frontmatter.theme == "tech-dark"
    assert body == "# Slide 1\ntext"


def test_defaults_without_frontmatter():
    frontmatter, body = extract_frontmatter("# Slide")

    assert frontmatter.theme == "default"
    assert frontmatter.transition_duration == 1000
    assert frontmatter.aspect_ratio == "16:9"
    assert frontmatter.title is None
    assert body == "# Slide"


def test_invalid_aspect_ratio_resets_to_default():
    frontmatter, _ = extract_frontmatter("---\naspectRatio: 21:9\n---\n# A")

    assert frontmatter.aspect_ratio == "16:9"


def test_ratio_is_read_as_text():
    frontmatter, _ = extract_frontmatter("---\naspectRatio: 4:3\n---\n# A")

    assert frontmatter.aspect_ratio == "4:3"


def test_transition_duration_coerced_from_text():
    frontmatter, _ = extract_frontmatter('---\ntransitionDuration: "1500"\n---\n')

    assert frontmatter.transition_duration == 1500


def test_transition_duration_range_is_not_validated():
    frontmatter, _ = extract_frontmatter("---\ntransitionDuration: -5\n---\n")

    assert frontmatter.transition_duration == -5


def test_non_numeric_duration_falls_back_to_default():
    frontmatter, _ = extract_frontmatter("---\ntransitionDuration: slow\n---\n")

    assert frontmatter.transition_duration == 1000


def test_unknown_keys_pass_through():
    frontmatter, _ = extract_frontmatter(
        "---\nlayout: grid\nimageStyle: watercolor\n---\n# A"
    )

    assert frontmatter.layout == "grid"
    assert frontmatter.get("imageStyle") == "watercolor"
    assert frontmatter.to_dict()["imageStyle"] == "watercolor"


def test_date_becomes_text():
    frontmatter, _ = extract_frontmatter("---\ndate: 2024-01-15\nauthor: Ada\n---\n")

    assert frontmatter.date == "2024-01-15"
    assert frontmatter.author == "Ada"


def test_malformed_yaml_is_ignored_but_stripped():
    frontmatter, body = extract_frontmatter("---\ntitle: [unclosed\n---\n# A")

    assert frontmatter.title is None
    assert frontmatter.theme == "default"
    assert body == "# A"


def test_body_after_block_is_preserved_verbatim():
    body_text = "\n# A\n\n  indented\n---\n# B\n"

    _, body = extract_frontmatter("---\ntitle: x\n---\n" + body_text)

    assert body == body_text


def test_extra_keys_are_read_only():
    source = {"layout": "grid"}
    frontmatter = Frontmatter.from_dict(source)
    source["layout"] = "zoom"

    assert frontmatter.layout == "grid"
    with pytest.raises(TypeError):
        frontmatter.extra["layout"] = "sphere"
    payload = frontmatter.to_dict()
    payload["layout"] = "line"
    assert frontmatter.layout == "grid"
