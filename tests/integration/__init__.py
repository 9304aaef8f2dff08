"""Integration tests for sitesmith.

This package contains tests that run the stores, preview service and CLI
against real SQLite databases.

Test Structure:
- test_templates.py: Template create, search, update, delete and duplicate
- test_pages.py: Page create, clone, update, delete and reorder
- test_versions.py: Version snapshots and restore
- test_themes.py: Palette and font presets applied to stored templates
- test_preview.py: Published content, previews and site generation
- test_cli.py: End-to-end command workflows
"""
