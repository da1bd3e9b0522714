from doc_capture.extraction.container_list_adapter import ContainerListAdapter
from doc_capture.extraction.container_locator import find_container_list
from doc_capture.extraction.document_response import DocumentResponseReader
from doc_capture.extraction.payload_scanner import PayloadScanner

__all__ = [
    "ContainerListAdapter",
    "DocumentResponseReader",
    "PayloadScanner",
    "find_container_list",
]
