"""Exceptions raised by the EPUB codec."""


class EpubError(Exception):
    """Base class for EPUB build and import failures."""


class InvalidEpubError(EpubError, ValueError):
    """The archive is not a readable EPUB (missing container or package document)."""


class MergeError(EpubError):
    """A source failed while merging several EPUBs; nothing was merged."""

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"Failed to merge {source}: {reason}")
