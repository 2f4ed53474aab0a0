"""Case corpus readers."""

from .markdown_loader import MarkdownCaseLoader, category_from_path, split_frontmatter

__all__ = ["MarkdownCaseLoader", "category_from_path", "split_frontmatter"]
