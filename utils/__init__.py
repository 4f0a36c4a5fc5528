# DEPENDENCIES
from .text_processor import TextProcessor
from .logger import ContraScopeLogger
from .validators import UploadValidator
from .document_reader import DocumentReader


__all__ = ['DocumentReader',
           'TextProcessor',
           'UploadValidator',
           'ContraScopeLogger',
          ]
