"""Sources subpackage for xml-snapshot-diff.

The base install provides ``LocalSource`` for files on the local machine.
The optional ``HttpSource`` reads files from a remote agent and is available
via an extra:

    pip install xml-snapshot-diff[http]

All sources satisfy the ``ContentSource`` Protocol structurally.
"""

from xml_snapshot_diff.sources.base import LOCAL, ContentSource, SourceRegistry
from xml_snapshot_diff.sources.local import LocalSource

__all__ = ["LOCAL", "ContentSource", "LocalSource", "SourceRegistry"]
