from prospect_scanner.extraction.base import BaseExtractor
from prospect_scanner.extraction.extractor import Extractor
from prospect_scanner.extraction.factory import ExtractorFactory

__all__ = ["BaseExtractor", "Extractor", "ExtractorFactory"]
