"""
CMS Migration UAT Suite - Source Package

Modules:
- config: Environment, settings and secret loading
- exceptions: Error hierarchy shared by the checkers
- source_paths: Legacy source path to new-site URL rewriting per product
- migration_data: Migration and country lookup CSV datasets
- content_config: Legacy content.config snapshot parsing
- delivery_api: Product CMS delivery API client and code checks
- source_path_checker: HTTP migration checks, cross-reference runs and CLI
- pages: Playwright page objects for the public site and both CMS back offices
"""

__version__ = "1.0.0"
