# =============================================================================
# Shared test configuration
# =============================================================================

import django
from django.conf import settings

import pytest

from journal.markdown.renderer import render_markdown

if not settings.configured:
    settings.configure(
        INSTALLED_APPS=["journal"],
        TEMPLATES=[{"BACKEND": "django.template.backends.django.DjangoTemplates"}],
        USE_TZ=True,
    )
    django.setup()


@pytest.fixture
def render():
    """Full pipeline: markdown in, sanitized HTML out."""
    return render_markdown
