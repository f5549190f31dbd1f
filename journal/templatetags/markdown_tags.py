# journal/templatetags/markdown_tags.py

from django import template
from django.utils.safestring import mark_safe

from journal.markdown.renderer import render_markdown

register = template.Library()


@register.filter(name="markdown")
def markdown_filter(value):
    return mark_safe(render_markdown(value))
