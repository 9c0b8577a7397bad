"""Project content: documents, the aggregated index and its delivery."""

from folio.content.indexer import IndexResult, build_index, run_indexer, scan_documents, write_index
from folio.content.models import ContentIndex, Document, ProjectMetadata, TeamMember
from folio.content.repository import ProjectRepository, parse_exclude

__all__ = [
    "ContentIndex",
    "Document",
    "IndexResult",
    "ProjectMetadata",
    "ProjectRepository",
    "TeamMember",
    "build_index",
    "parse_exclude",
    "run_indexer",
    "scan_documents",
    "write_index",
]
