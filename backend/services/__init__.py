"""Services for the job-intake chat backend."""
from .spec_loader import SpecificationLoader
from .conversation_manager import ConversationManager
from .message_assembler import MessageAssembler, SUMMARY_INSTRUCTION
from .llm_client import LLMClient, LLMResponse, LLMError, LLMClientError
from .structured_extractor import StructuredExtractor
from .export_sink import ExportSink, build_export_row, EXPORT_COLUMNS
from .orchestrator import ConversationOrchestrator

__all__ = ['SpecificationLoader', 'ConversationManager', 'MessageAssembler', 'SUMMARY_INSTRUCTION', 'LLMClient', 'LLMResponse', 'LLMError', 'LLMClientError', 'StructuredExtractor', 'ExportSink', 'build_export_row', 'EXPORT_COLUMNS', 'ConversationOrchestrator']
