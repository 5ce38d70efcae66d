"""Errors raised by the export/import and recovery pipeline."""


class StickyBoardError(Exception):
    pass


class ImportFailed(StickyBoardError):
    """Base for anything that makes a portable document unusable"""


class FormatError(ImportFailed):
    """Input is not a well-formed portable document"""


class VersionError(ImportFailed):
    """Document declares a schema version this codec does not understand"""

    def __init__(self, version):
        self.version = version
        super().__init__(f"Unsupported file version: {version!r}")


class SamplingError(StickyBoardError):
    """Pixel sample for a single fragment fell outside the image"""


class EngineError(StickyBoardError):
    """The OCR engine or image decoder failed"""


class ConfigError(StickyBoardError):
    """An environment setting could not be parsed"""
