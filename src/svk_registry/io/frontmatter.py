"""Leading YAML metadata on generated markdown documents."""

from dataclasses import dataclass
from typing import Any

import frontmatter
import yaml


@dataclass(frozen=True)
class MarkdownDocument:
    """A markdown document split into frontmatter metadata and body."""

    metadata: dict[str, Any]
    body: str

    def metadata_text(self, *keys: str) -> str:
        """Return the first present metadata value among ``keys`` as text.

        Lists are joined with spaces so tag lists can be substring-matched.
        """
        for key in keys:
            value = self.metadata.get(key)
            if value is None:
                continue
            if isinstance(value, list):
                return " ".join(str(item) for item in value)
            return str(value)
        return ""


def parse_document(content: str) -> MarkdownDocument:
    """Split ``content`` into metadata and body.

    Documents without frontmatter, or with frontmatter that is not valid YAML
    mapping data, come back with empty metadata and the full content as body.
    """
    # Producer-written YAML may be invalid
    try:
        post = frontmatter.loads(content)
    except (yaml.YAMLError, ValueError, TypeError):
        return MarkdownDocument(metadata={}, body=content)
    return MarkdownDocument(metadata=dict(post.metadata), body=post.content)


def describe_document(content: str) -> str:
    """One-line description of a document.

    Uses the ``title`` or ``description`` frontmatter field when present,
    otherwise the first non-empty body line with heading markers stripped.
    """
    document = parse_document(content)
    described = document.metadata_text("title", "description")
    if described:
        return described.strip()
    for line in document.body.splitlines():
        if line.strip():
            return line.strip().lstrip("#").strip()
    return ""
