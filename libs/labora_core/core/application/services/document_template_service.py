"""
Montagem determinística dos textos de orçamento e contrato.

Funções puras de um QuoteEntity (e da data corrente, no contrato): sem I/O.
A saída é estruturada em blocos marcados (heading/body/signature_line...),
consumidos pelo exportador de PDF.
"""
from __future__ import annotations

import re
from datetime import date

from labora_core.core.application.services.utils.formatters import BrazilianFormatter
from labora_core.core.application.services.utils.formatters import formatter as default_formatter
from labora_core.core.domain.company import LABORA_TECH, CompanyIdentity
from labora_core.core.domain.entities.document_entity import Block, BlockKind, DocumentKind, RenderedDocument
from labora_core.core.domain.entities.quote_entity import QuoteEntity, QuoteStatus
from labora_core.core.domain.exceptions import InvalidStateTransition

VALIDITY_NOTE = "Este orçamento é válido por 5 (cinco) dias úteis a partir da data de emissão."

QUOTE_TERMS = (
    "Os valores apresentados referem-se exclusivamente aos serviços descritos neste orçamento.",
    "Alterações de escopo solicitadas após a aprovação serão orçadas separadamente.",
    "O prazo de execução começa a contar a partir da aprovação deste orçamento e do "
    "recebimento de todas as informações necessárias.",
    "A forma de pagamento indicada deverá ser respeitada; atrasos no pagamento podem "
    "suspender a execução dos serviços.",
    "A aprovação deste orçamento não substitui o contrato de prestação de serviços, "
    "que será emitido em seguida.",
)

CONTRACT_TITLE = "INSTRUMENTO PARTICULAR DE PRESTAÇÃO DE SERVIÇOS DE TECNOLOGIA"

# cabeçalho de seção no texto livre editado à mão
HEADING_MIN_LENGTH = 20
_SIGNATURE_RE = re.compile(r"^(?P<label>\d+\.)?\s*_{5,}\s*$")
_LIST_RE = re.compile(r"^(-\s|[a-z]\)\s)")


def _heading(text: str) -> Block:
    return Block(BlockKind.HEADING, text)


def _body(text: str) -> Block:
    return Block(BlockKind.BODY, text)


def _item(text: str) -> Block:
    return Block(BlockKind.LIST_ITEM, text)


def _identity(company: CompanyIdentity) -> Block:
    return Block(BlockKind.IDENTITY, company.trade_name, items=tuple(company.contact_lines))


class DocumentTemplateService:
    def __init__(self, formatter: BrazilianFormatter | None = None, company: CompanyIdentity = LABORA_TECH):
        self.formatter = formatter or default_formatter
        self.company = company

    # ╭──────────────────────────────────────────────╮
    # │ Orçamento                                    │
    # ╰──────────────────────────────────────────────╯
    def render_quote_document(self, quote: QuoteEntity, today: date | None = None) -> RenderedDocument:
        issued_on = quote.created_at.date() if quote.created_at else (today or date.today())

        blocks: list[Block] = [
            _identity(self.company),
            _heading("DADOS DO CLIENTE"),
            Block(BlockKind.FIELD, quote.client_name, label="Nome"),
            Block(BlockKind.FIELD, quote.client_document, label="Documento"),
            _heading("DESCRIÇÃO DO SERVIÇO"),
            _body(quote.service_description),
        ]
        if quote.observations:
            blocks += [_heading("OBSERVAÇÕES"), _body(quote.observations)]

        blocks += [
            Block(
                BlockKind.HIGHLIGHT,
                pairs=(
                    ("VALOR TOTAL", self.formatter.format_currency(quote.value)),
                    ("Forma de Pagamento", quote.payment_method),
                ),
            ),
            _body(VALIDITY_NOTE),
            Block(BlockKind.TERMS, label="TERMOS E CONDIÇÕES", items=QUOTE_TERMS),
        ]

        if quote.status is QuoteStatus.APPROVED:
            blocks.append(Block(BlockKind.STAMP, "ORÇAMENTO APROVADO", label=quote.status.value))
        elif quote.status is QuoteStatus.REJECTED:
            blocks.append(Block(
                BlockKind.STAMP,
                "ORÇAMENTO REJEITADO",
                label=quote.status.value,
                items=(f"Justificativa: {quote.rejection_justification or ''}",),
            ))

        return RenderedDocument(
            kind=DocumentKind.QUOTE,
            title=f"ORÇAMENTO #{quote.number}",
            number=quote.number,
            issued_on=issued_on,
            blocks=tuple(blocks),
        )

    # ╭──────────────────────────────────────────────╮
    # │ Contrato                                     │
    # ╰──────────────────────────────────────────────╯
    def render_contract_document(self, quote: QuoteEntity, today: date | None = None) -> RenderedDocument:
        if quote.status is not QuoteStatus.APPROVED:
            raise InvalidStateTransition(
                quote.status.value,
                QuoteStatus.APPROVED.value,
                message="O contrato só pode ser gerado a partir de um orçamento aprovado.",
            )
        today = today or date.today()
        return RenderedDocument(
            kind=DocumentKind.CONTRACT,
            title=f"CONTRATO Nº {quote.number}",
            number=quote.number,
            issued_on=today,
            blocks=(_identity(self.company), *self._contract_blocks(quote, today)),
        )

    def render_contract_text(self, quote: QuoteEntity, today: date | None = None) -> str:
        """Texto editável do contrato (sem o bloco de identidade, que vai no cabeçalho)."""
        doc = self.render_contract_document(quote, today)
        body = [b for b in doc.blocks if b.kind is not BlockKind.IDENTITY]
        return RenderedDocument(doc.kind, doc.title, doc.number, doc.issued_on, tuple(body)).as_text()

    def contract_from_text(self, quote: QuoteEntity, content: str, today: date | None = None) -> RenderedDocument:
        """Documento de contrato a partir do texto editado à mão pela equipe."""
        today = today or date.today()
        return RenderedDocument(
            kind=DocumentKind.CONTRACT,
            title=f"CONTRATO Nº {quote.number}",
            number=quote.number,
            issued_on=today,
            blocks=(_identity(self.company), *parse_contract_text(content)),
        )

    def _contract_blocks(self, quote: QuoteEntity, today: date) -> list[Block]:
        c = self.company
        value = self.formatter.format_currency(quote.value)
        blocks: list[Block] = [
            _heading(CONTRACT_TITLE),
            _heading("IDENTIFICAÇÃO DAS PARTES CONTRATANTES"),
            _body(
                f"CONTRATANTE: {quote.client_name}, inscrito(a) no CPF/CNPJ sob o nº "
                f"{quote.client_document}, doravante denominado(a) simplesmente CONTRATANTE."
            ),
            _body(
                f"CONTRATADA: {c.trade_name}, pessoa jurídica de direito privado, inscrita no CNPJ "
                f"sob o nº {c.cnpj}, com sede em {c.address_line}, representada neste ato por seus sócios:"
            ),
            *[_item(f"- {p.name}, CPF: {p.cpf}") for p in c.partners],
            _body("Doravante denominada simplesmente CONTRATADA."),
            _body(
                "As partes acima identificadas têm, entre si, justo e acertado o presente Contrato de "
                "Prestação de Serviços de Tecnologia, que se regerá pelas cláusulas seguintes e pelas "
                "condições descritas no presente."
            ),

            _heading("OBJETO DO CONTRATO"),
            _body("Cláusula 1ª. O presente contrato tem como objeto a prestação dos seguintes serviços de tecnologia:"),
            _body(quote.service_description),

            _heading("VIGÊNCIA E PRAZO"),
            _body(
                "Cláusula 2ª. O presente contrato terá vigência de 12 (doze) meses, iniciando-se na data "
                "de sua assinatura, podendo ser prorrogado mediante acordo entre as partes."
            ),
            _body(
                "Cláusula 3ª. O prazo para entrega do projeto inicial é de 30 (trinta) dias úteis, contados "
                "a partir da assinatura deste contrato e do recebimento de todos os materiais e informações "
                "necessários para sua execução."
            ),

            _heading("VALOR E FORMA DE PAGAMENTO"),
            _body(
                f"Cláusula 4ª. Pela prestação dos serviços, a CONTRATANTE pagará à CONTRATADA o valor total "
                f"de {value}, a ser pago da seguinte forma: {quote.payment_method}."
            ),

            _heading("SERVIÇO DE MANUTENÇÃO MENSAL (OPCIONAL)"),
            _body(
                "Cláusula 5ª. Após a entrega do projeto, a CONTRATANTE poderá optar pela contratação do "
                "serviço de manutenção mensal, que inclui:"
            ),
            _item("- Atualizações de segurança"),
            _item("- Backup periódico"),
            _item("- Correção de bugs"),
            _item("- Pequenas alterações de conteúdo"),
            _item("- Suporte técnico por e-mail e WhatsApp"),
            _body(
                "§1º O valor do serviço de manutenção mensal é de R$ 89,90 (oitenta e nove reais e "
                "noventa centavos)."
            ),
            _body("§2º O primeiro mês de manutenção será gratuito."),
            _body("§3º O serviço poderá ser cancelado a qualquer momento, com aviso prévio de 30 dias."),

            _heading("OBRIGAÇÕES DA CONTRATADA"),
            _body("Cláusula 6ª. São obrigações da CONTRATADA:"),
            _item("a) Executar os serviços conforme especificações deste contrato;"),
            _item("b) Manter sigilo sobre todas as informações obtidas em função da prestação de serviços;"),
            _item("c) Garantir a qualidade técnica dos serviços;"),
            _item("d) Fornecer suporte técnico durante o desenvolvimento;"),
            _item("e) Realizar backup periódico dos dados;"),
            _item(
                "f) Corrigir, sem ônus para a CONTRATANTE, quaisquer erros ou defeitos técnicos "
                "decorrentes da execução dos serviços."
            ),

            _heading("OBRIGAÇÕES DA CONTRATANTE"),
            _body("Cláusula 7ª. São obrigações da CONTRATANTE:"),
            _item("a) Fornecer todas as informações necessárias para execução dos serviços;"),
            _item("b) Realizar os pagamentos conforme acordado;"),
            _item("c) Designar responsável para acompanhamento do projeto;"),
            _item("d) Realizar a validação e testes necessários nos prazos estabelecidos;"),
            _item("e) Respeitar os direitos de propriedade intelectual da CONTRATADA."),

            _heading("CONFIDENCIALIDADE E PROTEÇÃO DE DADOS"),
            _body("Cláusula 8ª. As partes se comprometem a:"),
            _item("a) Manter sigilo sobre informações confidenciais;"),
            _item("b) Proteger dados pessoais conforme a LGPD (Lei 13.709/2018);"),
            _item("c) Implementar medidas de segurança adequadas;"),
            _item("d) Notificar imediatamente qualquer violação de dados."),

            _heading("PROPRIEDADE INTELECTUAL"),
            _body(
                "Cláusula 9ª. Os direitos de propriedade intelectual sobre os produtos desenvolvidos serão "
                "transferidos à CONTRATANTE após a quitação total do contrato, exceto:"
            ),
            _item("a) Bibliotecas e frameworks de terceiros;"),
            _item("b) Componentes reutilizáveis desenvolvidos previamente pela CONTRATADA;"),
            _item("c) Metodologias e conhecimentos técnicos da CONTRATADA."),

            _heading("RESCISÃO"),
            _body("Cláusula 10ª. O presente contrato poderá ser rescindido:"),
            _item("a) Por comum acordo entre as partes;"),
            _item("b) Por inadimplemento de qualquer cláusula contratual;"),
            _item("c) Mediante notificação prévia de 30 (trinta) dias;"),
            _item("d) Por força maior ou caso fortuito."),
            _body(
                "Parágrafo único: Em caso de rescisão, serão devidos os valores proporcionais aos "
                "serviços já executados."
            ),

            _heading("DISPOSIÇÕES GERAIS"),
            _body("Cláusula 11ª. Este contrato é celebrado em caráter irrevogável e irretratável."),
            _body("Cláusula 12ª. Qualquer modificação deste contrato só será válida mediante aditivo contratual escrito."),
            _body("Cláusula 13ª. Os casos omissos serão resolvidos de acordo com a legislação vigente."),

            _heading("FORO"),
            _body(
                "Cláusula 14ª. Para dirimir quaisquer controvérsias oriundas deste contrato, as partes "
                "elegem o foro da comarca de Brasília-DF."
            ),

            _body(
                "Por estarem assim justos e contratados, firmam o presente instrumento em duas vias de "
                "igual teor."
            ),
            _body(f"{c.city}, {self.formatter.format_date(today)}"),

            Block(BlockKind.SIGNATURE_LINE, quote.client_name, items=(f"CPF/CNPJ: {quote.client_document}",)),
            *[
                Block(BlockKind.SIGNATURE_LINE, p.signature_name, items=(f"CPF: {p.cpf}",))
                for p in c.partners
            ],

            _body("TESTEMUNHAS:"),
            Block(BlockKind.SIGNATURE_LINE, label="1.", items=("Nome:", "CPF:")),
            Block(BlockKind.SIGNATURE_LINE, label="2.", items=("Nome:", "CPF:")),
        ]
        return blocks


def parse_contract_text(content: str) -> list[Block]:
    """
    Converte o texto livre (editado à mão) em blocos. Sem marcação explícita,
    uma linha inteira em maiúsculas com mais de 20 caracteres vira título;
    linhas de sublinhados viram linha de assinatura, com as linhas seguintes
    (nome, documento) até a próxima linha em branco.
    """
    blocks: list[Block] = []
    lines = content.replace("\r\n", "\n").split("\n")
    i = 0
    while i < len(lines):
        line = lines[i].rstrip()
        stripped = line.strip()
        i += 1

        if not stripped:
            if blocks and blocks[-1].kind is not BlockKind.SPACER:
                blocks.append(Block(BlockKind.SPACER))
            continue

        sig = _SIGNATURE_RE.match(stripped)
        if sig:
            below: list[str] = []
            while i < len(lines) and lines[i].strip():
                below.append(lines[i].strip())
                i += 1
            text = below[0] if below and sig.group("label") is None else ""
            items = below[1:] if text else below
            blocks.append(Block(BlockKind.SIGNATURE_LINE, text, label=sig.group("label"), items=tuple(items)))
            continue

        if stripped.upper() == stripped and len(stripped) > HEADING_MIN_LENGTH:
            blocks.append(_heading(stripped))
        elif _LIST_RE.match(stripped):
            blocks.append(_item(stripped))
        else:
            blocks.append(_body(stripped))

    while blocks and blocks[-1].kind is BlockKind.SPACER:
        blocks.pop()
    return blocks
