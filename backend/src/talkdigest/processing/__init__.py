"""Message processing pipeline"""

from .service import MessageProcessingService, ProcessingResult

__all__ = ["MessageProcessingService", "ProcessingResult"]
