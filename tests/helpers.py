"""
Shared markup samples and factories for tests.
"""

from wcag_fixer.analyzers.dom_parser import Document
from wcag_fixer.contracts.levels import Severity
from wcag_fixer.contracts.violation import Violation


ACCESSIBLE_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><title>Bikes</title></head>
<body>
<header><nav><a href="/">Home page</a></nav></header>
<main>
<h1>Bikes</h1>
<h2>Gallery</h2>
<img src="bike.jpg" alt="Red bicycle leaning against a brick wall">
<form>
<label for="email">Email</label>
<input id="email" type="email" name="email">
</form>
</main>
</body>
</html>"""

BROKEN_PAGE = """<!DOCTYPE html>
<html>
<head><title>Broken</title></head>
<body>
<div id="main">
<h2>Welcome</h2>
<h4>Details</h4>
<img src="/images/photo.jpg">
<input type="text" name="first_name">
<a href="/more" target="_blank">Read about our shop</a>
<div onclick="openMenu()">Menu</div>
<p style="color: #777777; background-color: #888888">Low contrast</p>
<span class="error">Something went wrong</span>
</div>
</body>
</html>"""


def parse(markup: str, page_id: str = "test.html") -> Document:
    """Parse markup into a Document."""
    return Document(markup, page_id=page_id)


def make_violation(
    rule_id: str = "1.1.1-img-alt",
    message: str = "Image missing alt attribute",
    element: str = "<img/>",
    location: str = "/html/body/img",
    severity: Severity = Severity.CRITICAL,
    auto_fixable: bool = True,
    node_index=None,
    check: str = "missing-alt",
    **kwargs,
) -> Violation:
    """Factory for Violation objects."""
    return Violation(
        rule_id=rule_id,
        message=message,
        element=element,
        location=location,
        severity=severity,
        auto_fixable=auto_fixable,
        node_index=node_index,
        check=check,
        **kwargs,
    )


def checks(violations) -> list:
    """Check kinds of violations, in order."""
    return [v.check for v in violations]


def evaluate_and_fix(rule, markup: str):
    """
    Evaluate a rule, fix a clone, and return (violations, fixes, clone).
    """
    document = parse(markup)
    violations = rule.evaluate(document)
    working = document.clone()
    fixes = rule.apply_fixes(working, violations)
    return violations, fixes, working
