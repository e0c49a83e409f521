from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentFileDTO:
    file_name: str
    content: bytes
    content_type: str = "application/pdf"
