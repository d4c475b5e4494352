"""
Tests for ImageAltRule (1.1.1 Non-text Content).
"""

import pytest

from wcag_fixer.contracts.levels import ComplianceLevel, Severity
from wcag_fixer.rules.image_alt_rule import (
    ImageAltRule,
    is_decorative,
    is_generic_alt,
    placeholder_alt,
)

from tests.helpers import checks, evaluate_and_fix, parse


class TestImageAltRule:
    """Tests for detection and fixing."""

    def setup_method(self):
        self.rule = ImageAltRule()

    def test_descriptor(self):
        assert self.rule.rule_id == "1.1.1-img-alt"
        assert self.rule.level == ComplianceLevel.A
        assert self.rule.descriptor.auto_fixable is True

    def test_missing_alt_is_one_critical_fixable_violation(self):
        violations = self.rule.evaluate(parse('<img src="photo.jpg">'))
        assert len(violations) == 1
        assert violations[0].severity == Severity.CRITICAL
        assert violations[0].auto_fixable is True
        assert violations[0].check == "missing-alt"

    def test_missing_alt_fix_uses_filename(self):
        violations, fixes, working = evaluate_and_fix(self.rule, '<img src="photo.jpg">')
        assert fixes == 1
        assert working.select_one("img")["alt"] == "Image: photo.jpg"

    def test_fix_is_idempotent(self):
        document = parse('<img src="photo.jpg">')
        violations = self.rule.evaluate(document)
        working = document.clone()
        assert self.rule.apply_fixes(working, violations) == 1
        assert self.rule.apply_fixes(working, violations) == 0

    def test_generic_alt_flagged_not_fixed(self):
        violations, fixes, working = evaluate_and_fix(self.rule, '<img src="a.png" alt="image">')
        assert checks(violations) == ["generic-alt"]
        assert violations[0].auto_fixable is False
        assert fixes == 0
        assert working.select_one("img")["alt"] == "image"

    def test_descriptive_alt_untouched(self):
        markup = '<img src="a.png" alt="Red bicycle leaning against a brick wall">'
        violations, fixes, working = evaluate_and_fix(self.rule, markup)
        assert violations == []
        assert fixes == 0
        assert working.serialize() == parse(markup).serialize()

    def test_empty_alt_on_content_image(self):
        violations = self.rule.evaluate(parse('<img src="team.jpg" alt="">'))
        assert checks(violations) == ["empty-alt"]
        assert violations[0].severity == Severity.SERIOUS

    def test_empty_alt_on_decorative_image(self):
        markup = '<img src="spacer.gif" alt=""><img src="x.png" alt="" role="presentation">'
        assert self.rule.evaluate(parse(markup)) == []

    def test_no_images(self):
        document = parse("<p>No images</p>")
        assert self.rule.evaluate(document) == []
        assert self.rule.apply_fixes(document, []) == 0

    def test_violations_carry_node_index(self):
        document = parse('<div><img src="a.png"></div>')
        violation = self.rule.evaluate(document)[0]
        assert document.node_at(violation.node_index).name == "img"


class TestAltHeuristics:
    """Tests for the helper heuristics."""

    @pytest.mark.parametrize("alt", [
        "image", "Photo", "logo", "click here", "image of a cat",
        "company logo", "*", "IMG_1234.JPG", "https://example.com/a.png",
        "/images/banner",
    ])
    def test_generic(self, alt):
        assert is_generic_alt(alt) is True

    @pytest.mark.parametrize("alt", [
        "Red bicycle leaning against a brick wall",
        "Imagery of the coast",
        "",
    ])
    def test_not_generic(self, alt):
        assert is_generic_alt(alt) is False

    def test_placeholder_alt(self):
        assert placeholder_alt("/static/img/hero.png?v=2") == "Image: hero.png"
        assert placeholder_alt("") == "[IMAGE DESCRIPTION NEEDED]"

    def test_decorative_dimensions(self):
        tiny = parse('<img src="a.png" width="2" height="3">').select_one("img")
        line = parse('<img src="a.png" width="400" height="1">').select_one("img")
        normal = parse('<img src="a.png" width="40" height="40">').select_one("img")
        bad = parse('<img src="a.png" width="auto" height="1">').select_one("img")
        assert is_decorative(tiny) is True
        assert is_decorative(line) is True
        assert is_decorative(normal) is False
        assert is_decorative(bad) is False

    def test_decorative_class(self):
        img = parse('<img class="hero Decorative" src="a.png">').select_one("img")
        assert is_decorative(img) is True
