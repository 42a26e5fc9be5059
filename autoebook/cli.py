# autoebook/cli.py
import json
import logging
import sys
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from autoebook.factory import CHUNK_PRESETS, build_analyzer, build_chunk_config
from autoebook.processor.chapters import split_by_chapters, split_into_chapters
from autoebook.processor.chunker.chunker import Chunker
from autoebook.processor.models import ReadabilityReport
from autoebook.processor.parsers.factory import ParserFactory, UnsupportedFormatError
from autoebook.processor.preprocessor import PreprocessOptions, preprocess_content
from autoebook.processor.readability import analyze_readability, compare_readability
from autoebook.processor.stats import count_words
from autoebook.processor.toc import extract_table_of_contents
from autoebook.router.collaborator import AllModelsExhaustedError


# Carga .env una sola vez, antes que cualquier otra cosa
load_dotenv()

# Extensiones soportadas
_SUPPORTED_FORMATS = {".txt", ".md", ".markdown"}

_PREVIEW_LENGTH = 200

_book_option = click.option(
    "--book", "-b",
    required = True,
    type     = click.Path(exists=False),   # validamos nosotros para mejor mensaje
    help     = "Ruta al manuscrito (.txt, .md)",
)

_chunk_size_option = click.option(
    "--chunk-size",
    default      = "standard",
    show_default = True,
    type         = click.Choice(sorted(CHUNK_PRESETS), case_sensitive=False),
    help         = "Tamaño de chunk: compact (4000), standard (8000), large (16000 caracteres)",
)


# ------------------------------------------------------------------
# Grupo raíz
# ------------------------------------------------------------------

@click.group()
@click.version_option(package_name="autoebook")
@click.option("--verbose", "-v", is_flag=True, help="Muestra el log de cada paso.")
def main(verbose: bool):
    """
    AutoEbook: prepara manuscritos para convertirlos en ebooks.

    Normaliza el texto, detecta capítulos y analiza el contenido con IA
    en chunks acotados.
    """
    if verbose:
        logging.basicConfig(
            level  = logging.INFO,
            format = "%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# ------------------------------------------------------------------
# autoebook analyze
# ------------------------------------------------------------------

@main.command()
@_book_option
@_chunk_size_option
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Archivo JSON de salida (por defecto stdout)")
@click.option("--config", "config_path", type=click.Path(), help="Ruta al config.yaml")
def analyze(book: str, chunk_size: str, output: Optional[str], config_path: Optional[str]):
    """Analiza el manuscrito con IA: índice, tipo de contenido y puntos de imagen."""
    text = _read_manuscript(book)

    try:
        analyzer = build_analyzer(config_path=config_path, chunk_size=chunk_size)
    except FileNotFoundError as e:
        _abort(str(e))
    except RuntimeError as e:
        _abort(str(e))

    def on_progress(current: int, total: int) -> None:
        click.echo(f"[autoebook] Chunk {current}/{total} analizado", err=True)

    try:
        result = analyzer.analyze(text, on_progress=on_progress)

    except AllModelsExhaustedError as e:
        _error(f"Sin modelos disponibles. {e}")
        sys.exit(2)

    except KeyboardInterrupt:
        click.echo("\n[autoebook] Análisis interrumpido.", err=True)
        sys.exit(0)

    payload = {
        "analysis": asdict(result.analysis),
        "meta": {
            "wasChunked":   result.was_chunked,
            "chunkCount":   result.chunk_count,
            "failedChunks": result.failed_chunks,
        },
    }
    _emit_json(payload, output)

    if result.failed_chunks:
        click.echo(
            click.style(
                f"[autoebook] ⚠ {len(result.failed_chunks)} chunks fallaron y se analizaron vacíos",
                fg="yellow",
            ),
            err=True,
        )


# ------------------------------------------------------------------
# autoebook preprocess
# ------------------------------------------------------------------

@main.command()
@_book_option
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Archivo de salida (por defecto <libro>.processed.md)")
@click.option("--line-break/--no-line-break", default=True, show_default=True, help="Partir líneas largas por oraciones")
@click.option("--chapters/--no-chapters", default=True, show_default=True, help="Convertir capítulos detectados a markdown")
@click.option("--spaces/--no-spaces", default=True, show_default=True, help="Eliminar espacios sobrantes")
@click.option("--punctuation/--no-punctuation", default=True, show_default=True, help="Normalizar la puntuación")
def preprocess(
    book: str,
    output: Optional[str],
    line_break: bool,
    chapters: bool,
    spaces: bool,
    punctuation: bool,
):
    """Normaliza el manuscrito y muestra la mejora de legibilidad."""
    text = _read_manuscript(book)

    options = PreprocessOptions(
        auto_line_break     = line_break,
        detect_chapters     = chapters,
        remove_extra_spaces = spaces,
        fix_punctuation     = punctuation,
    )
    processed   = preprocess_content(text, options)
    comparison  = compare_readability(text, processed)
    output_path = Path(output) if output else Path(book).with_suffix(".processed.md")
    output_path.write_text(processed, encoding="utf-8")

    click.echo("")
    click.echo("─" * 50)
    click.echo(f"[autoebook] ✓ Preprocesado completado")
    click.echo(f"[autoebook]   Longitud     : {len(text)} → {len(processed)} caracteres")
    click.echo(f"[autoebook]   Legibilidad  : {comparison.original.score} → {comparison.processed.score} "
               f"({comparison.improvement:+d})")
    _print_issues(comparison.processed)

    found = split_by_chapters(processed)
    click.echo(f"[autoebook]   Capítulos    : {len(found)}")
    for chapter in found:
        preview = chapter.content[:_PREVIEW_LENGTH]
        if len(chapter.content) > _PREVIEW_LENGTH:
            preview += "..."
        click.echo(f"[autoebook]     - {chapter.title} ({count_words(chapter.content)} palabras)")
        if preview:
            click.echo(f"[autoebook]       {preview.splitlines()[0]}")

    click.echo(f"[autoebook]   Output       : {output_path}")
    click.echo("─" * 50)


# ------------------------------------------------------------------
# Comandos locales (sin IA)
# ------------------------------------------------------------------

@main.command()
@_book_option
def readability(book: str):
    """Puntúa la legibilidad estructural del manuscrito (0-100)."""
    report = analyze_readability(_read_manuscript(book))
    click.echo(f"[autoebook] Legibilidad: {report.score}/100")
    _print_issues(report)


@main.command()
@_book_option
@click.option("--export", "export_mode", is_flag=True, help="Solo headings markdown de nivel ≤ 2 (modo exportación)")
def chapters(book: str, export_mode: bool):
    """Lista los capítulos detectados."""
    text  = _read_manuscript(book)
    found = split_into_chapters(text) if export_mode else split_by_chapters(text)

    if not found:
        click.echo("[autoebook] No se detectaron capítulos.")
        return

    for chapter in found:
        marker = " (sintético)" if chapter.synthetic else ""
        click.echo(
            f"{'  ' * (chapter.level - 1)}{chapter.title}{marker} "
            f"— línea {chapter.start_line + 1}, {count_words(chapter.content)} palabras"
        )


@main.command()
@_book_option
@click.option("--json", "as_json", is_flag=True, help="Salida en JSON")
def toc(book: str, as_json: bool):
    """Extrae el índice de los headings markdown."""
    entries = extract_table_of_contents(_read_manuscript(book))

    if as_json:
        _emit_json([asdict(e) for e in entries], None)
        return

    if not entries:
        click.echo("[autoebook] No hay headings markdown. Prueba con 'autoebook preprocess'.")
        return

    for entry in entries:
        click.echo(f"{'  ' * (entry.level - 1)}{entry.title}  [{entry.id}, línea {entry.position}]")


@main.command()
@_book_option
@_chunk_size_option
def chunks(book: str, chunk_size: str):
    """Muestra cómo se dividiría el manuscrito para el análisis con IA."""
    text    = _read_manuscript(book)
    chunker = Chunker(build_chunk_config(chunk_size))

    if not chunker.needs_chunking(text):
        click.echo(f"[autoebook] {len(text)} caracteres: cabe en una sola llamada, no se divide.")
        return

    found = chunker.split(text)
    click.echo(f"[autoebook] {len(text)} caracteres → {len(found)} chunks")
    for chunk in found:
        click.echo(
            f"  #{chunk.index + 1}: líneas {chunk.start_line + 1}-{chunk.end_line + 1} "
            f"({len(chunk.content)} caracteres)"
        )


# ------------------------------------------------------------------
# Helpers de validación
# ------------------------------------------------------------------

def _read_manuscript(path: str) -> str:
    """Valida el archivo y devuelve su texto. El texto vacío se rechaza aquí."""
    _validate_file(path)

    try:
        manuscript = ParserFactory.parse_file(path)
    except FileNotFoundError:
        _abort(f"Archivo no encontrado: {path}")
    except UnsupportedFormatError as e:
        _abort(str(e))

    if not manuscript.text.strip():
        _abort(f"El manuscrito está vacío: {path}")

    return manuscript.text


def _validate_file(path: str) -> None:
    """Verifica existencia y formato del archivo."""
    p = Path(path)

    if not p.exists():
        _abort(f"Archivo no encontrado: {path}")

    if not p.is_file():
        _abort(f"La ruta no es un archivo: {path}")

    if p.suffix.lower() not in _SUPPORTED_FORMATS:
        supported = ", ".join(sorted(_SUPPORTED_FORMATS))
        _abort(
            f"Formato no soportado: '{p.suffix}'\n"
            f"Formatos disponibles: {supported}"
        )


# ------------------------------------------------------------------
# Helpers de output
# ------------------------------------------------------------------

def _print_issues(report: ReadabilityReport) -> None:
    for issue, suggestion in zip(report.issues, report.suggestions):
        click.echo(click.style(f"[autoebook]   ⚠ {issue} → {suggestion}", fg="yellow"))


def _emit_json(payload, output: Optional[str]) -> None:
    rendered = json.dumps(payload, ensure_ascii=False, indent=2, default=_json_default)
    if output:
        Path(output).write_text(rendered, encoding="utf-8")
        click.echo(f"[autoebook] Análisis guardado en {output}", err=True)
    else:
        click.echo(rendered)


def _json_default(value):
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Tipo no serializable: {type(value).__name__}")


def _abort(message: str) -> None:
    """Error de validación: culpa del usuario."""
    click.echo(click.style(f"[autoebook] Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _error(message: str) -> None:
    """Error de sistema, no es culpa del usuario."""
    click.echo(click.style(f"[autoebook] {message}", fg="red"), err=True)
