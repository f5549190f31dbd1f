def get_markdown_config():
    """
    Configuration for the markdown-it parser.

    Starts from the CommonMark preset and switches on the GitHub-flavoured
    pieces authors expect: tables, ~~strikethrough~~, bare URL autolinks and
    hard line breaks on single newlines.

    Raw HTML is let through on purpose. It is not trusted: the sanitizer
    postprocessor filters the whole document afterwards.

    Definition lists and task lists are registered as plugins by the renderer.
    """
    return {
        "preset": "commonmark",
        "options": {
            "html": True,
            "breaks": True,
            "linkify": True,
        },
        # Rules the commonmark preset leaves disabled
        "enable": [
            "table",
            "strikethrough",
            "linkify",
        ],
    }
