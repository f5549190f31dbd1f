from django.apps import AppConfig


class JournalConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'journal'
    verbose_name = 'Journal'

    def ready(self):
        """Build the markdown parser up front instead of on the first request."""
        from journal.markdown.renderer import get_markdown_parser

        get_markdown_parser()
