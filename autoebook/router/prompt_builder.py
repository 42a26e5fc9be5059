# router/prompt_builder.py
from typing import Optional

from autoebook.processor.models import ChunkHints


_OUTPUT_CONTRACT = """\
    --- FORMATO DE SALIDA (ESTRICTO) ---
    Devuelve EXACTAMENTE 1 objeto JSON válido y nada más.
    El primer carácter debe ser "{{" y el último "}}".
    No uses markdown. No uses ```json. No añadas comentarios ni texto extra.

    Estructura exacta:
    {{
      "contentType": "fiction | non-fiction | technical | educational",
      "tableOfContents": [
        {{"title": "texto del heading", "level": 1, "position": {position_hint}}}
      ],
      "imagePoints": [
        {{
          "section": "nombre de la sección o capítulo",
          "afterParagraph": 1,
          "lineNumber": {line_hint},
          "suggestedType": "illustration | diagram | chart | infographic",
          "context": "2-3 frases del contexto alrededor",
          "generatedPrompt": "prompt detallado para generar la imagen"
        }}
      ]
    }}
    """

_CHUNK_SYSTEM = """\
    Eres un analista de contenido experto en la creación de ebooks.
    Analiza el siguiente fragmento de un manuscrito.

    --- CONTEXTO ---
    - Fragmento {number} de {total} (líneas {first_line} a {last_line} del documento).
    {position_note}

    --- REGLAS ---
    - Identifica solo headings que aparezcan realmente en este fragmento.
    - Sugiere entre 1 y 3 imágenes según el contenido.
    - Los números de línea son RELATIVOS a este fragmento, empezando en 1.
      El sistema los convierte a posiciones absolutas después.

    {contract}
    --- FRAGMENTO ---
    \"\"\"
    {content}
    \"\"\"
    """

_DOCUMENT_SYSTEM = """\
    Eres un analista de contenido experto en la creación de ebooks.
    Analiza el siguiente manuscrito completo.

    --- REGLAS ---
    - Sugiere entre 3 y 8 imágenes según la longitud del contenido.
    - Coloca las imágenes después de conceptos clave, nunca a mitad de una explicación.
    - Ficción: ilustraciones de escenas clave.
    - Técnico: diagramas para procesos, gráficos para datos.
    - Educativo: infografías y diagramas explicativos.
    - Cada prompt debe ser lo bastante detallado para generar una imagen relevante.
    - Los números de línea empiezan en 1.

    {contract}
    --- MANUSCRITO ---
    \"\"\"
    {content}
    \"\"\"
    """

_FIRST_NOTE = "- Es el PRIMER fragmento: presta atención a la apertura y a los temas principales."
_LAST_NOTE = "- Es el ÚLTIMO fragmento: presta atención a las conclusiones."


def build_chunk_analysis_prompt(
    chunk_text:  str,
    chunk_index: int,
    chunk_count: int,
    hints:       Optional[ChunkHints] = None,
) -> str:
    """
    Construye el prompt de análisis para UN chunk de un documento largo.
    Sin hints se trata el chunk como documento completo.
    """
    if hints is None:
        return build_document_analysis_prompt(chunk_text)

    notes = []
    if hints.is_first:
        notes.append(_FIRST_NOTE)
    if hints.is_last:
        notes.append(_LAST_NOTE)

    return _CHUNK_SYSTEM.format(
        number        = chunk_index + 1,
        total         = chunk_count,
        first_line    = hints.start_line + 1,
        last_line     = hints.end_line + 1,
        position_note = "\n    ".join(notes),
        contract      = _format_contract("<línea dentro del fragmento>"),
        content       = chunk_text,
    )


def build_document_analysis_prompt(text: str) -> str:
    """Prompt para un documento que cabe entero en una sola llamada."""
    return _DOCUMENT_SYSTEM.format(
        contract = _format_contract("<número de línea>"),
        content  = text,
    )


def _format_contract(line_hint: str) -> str:
    return _OUTPUT_CONTRACT.format(position_hint=line_hint, line_hint=line_hint)
