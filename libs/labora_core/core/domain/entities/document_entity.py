from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

SIGNATURE_RULE = "_" * 45


class DocumentKind(str, Enum):
    QUOTE = "quote"
    CONTRACT = "contract"


class BlockKind(str, Enum):
    IDENTITY = "identity"
    HEADING = "heading"
    BODY = "body"
    FIELD = "field"
    LIST_ITEM = "list_item"
    HIGHLIGHT = "highlight"
    TERMS = "terms"
    STAMP = "stamp"
    SIGNATURE_LINE = "signature_line"
    SPACER = "spacer"


@dataclass(frozen=True)
class Block:
    """
    Trecho de documento com marcação estrutural explícita.

    - IDENTITY: text = nome fantasia, items = linhas de contato
    - FIELD: label + text
    - HIGHLIGHT: pairs = ((rótulo, valor), ...)
    - TERMS: label = título, items = cláusulas
    - STAMP: label = status, text = selo, items = linhas extras
    - SIGNATURE_LINE: label = prefixo ("1."), text = nome, items = linhas abaixo
    """
    kind: BlockKind
    text: str = ""
    label: str | None = None
    items: tuple[str, ...] = ()
    pairs: tuple[tuple[str, str], ...] = ()

    def as_text(self) -> str:  # noqa: PLR0911
        if self.kind is BlockKind.IDENTITY:
            return "\n".join([self.text, *self.items])
        if self.kind is BlockKind.FIELD:
            return f"{self.label}: {self.text}"
        if self.kind is BlockKind.HIGHLIGHT:
            return "\n".join(f"{label}: {value}" for label, value in self.pairs)
        if self.kind is BlockKind.TERMS:
            lines = [self.label or ""]
            lines.extend(f"{i}. {clause}" for i, clause in enumerate(self.items, start=1))
            return "\n".join(lines)
        if self.kind is BlockKind.STAMP:
            return "\n".join([self.text, *self.items])
        if self.kind is BlockKind.SIGNATURE_LINE:
            rule = f"{self.label} {SIGNATURE_RULE}" if self.label else SIGNATURE_RULE
            return "\n".join(line for line in [rule, self.text, *self.items] if line)
        if self.kind is BlockKind.SPACER:
            return ""
        return self.text


@dataclass(frozen=True)
class RenderedDocument:
    kind: DocumentKind
    title: str
    number: int | None
    issued_on: date
    blocks: tuple[Block, ...] = field(default=())

    def of_kind(self, kind: BlockKind) -> list[Block]:
        return [b for b in self.blocks if b.kind is kind]

    @property
    def identity(self) -> Block | None:
        found = self.of_kind(BlockKind.IDENTITY)
        return found[0] if found else None

    def as_text(self) -> str:
        """
        Forma texto puro do documento. Itens de lista consecutivos ficam em
        linhas seguidas; os demais blocos são separados por linha em branco.
        """
        parts: list[str] = []
        previous: Block | None = None
        for block in self.blocks:
            if block.kind is BlockKind.SPACER:
                previous = block
                continue
            text = block.as_text()
            if parts and previous is not None and previous.kind is BlockKind.LIST_ITEM and block.kind is BlockKind.LIST_ITEM:
                parts[-1] = f"{parts[-1]}\n{text}"
            else:
                parts.append(text)
            previous = block
        return "\n\n".join(parts)
