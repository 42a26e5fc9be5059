import pytest

from autoebook.processor.chunker.chunker import (
    Chunker,
    needs_chunking,
    seed_overlap,
    split_into_chunks,
)
from autoebook.processor.chunker.models import ChunkConfig

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def chunker():
    return Chunker()


@pytest.fixture
def small_chunker():
    # 10 líneas de 80 caracteres por chunk, overlap de 2 líneas
    return Chunker(ChunkConfig(chunk_size=800, overlap=160, avg_line_length=80))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _lines(count: int, width: int = 79) -> list[str]:
    """Líneas distinguibles de ancho fijo (sin blancos ni headings)."""
    return [f"{i:04d}" + "x" * (width - 4) for i in range(count)]


def _reconstruct(chunks) -> list[str]:
    """Quita el overlap y reconstruye las líneas del documento."""
    result: list[str] = []
    covered = -1
    for chunk in chunks:
        for offset, line in enumerate(chunk.lines):
            absolute = chunk.start_line + offset
            if absolute > covered:
                result.append(line)
                covered = absolute
    return result


# ---------------------------------------------------------------------------
# needs_chunking
# ---------------------------------------------------------------------------


def test_needs_chunking_es_falso_hasta_el_umbral_inclusive(chunker):
    assert chunker.needs_chunking("a" * 8000) is False
    assert chunker.needs_chunking("a" * 8001) is True


def test_atajo_de_modulo_usa_config_por_defecto():
    assert needs_chunking("corto") is False
    assert needs_chunking("a" * 20, ChunkConfig(chunk_size=10)) is True


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


def test_documento_de_20000_caracteres_produce_tres_chunks(chunker):
    """20.000 caracteres con chunk 8.000 y overlap 500 → exactamente 3 chunks."""
    # Arrange
    lines = _lines(250)
    lines[-1] += "x"
    text = "\n".join(lines)
    assert len(text) == 20000

    # Act
    chunks = chunker.split(text)

    # Assert
    assert len(chunks) == 3
    assert [c.is_first for c in chunks] == [True, False, False]
    assert [c.is_last for c in chunks] == [False, False, True]
    assert [c.index for c in chunks] == [0, 1, 2]


def test_overlap_arrastra_las_ultimas_lineas_del_chunk_anterior(chunker):
    lines = _lines(250)
    chunks = chunker.split("\n".join(lines))

    first, second = chunks[0], chunks[1]
    # ceil(500 / 80) = 7 líneas de overlap
    assert first.end_line == 99
    assert second.start_line == 93
    assert second.lines[:7] == first.lines[-7:]


def test_offsets_coinciden_con_el_documento_original(chunker):
    lines = _lines(400, width=60)
    chunks = chunker.split("\n".join(lines))

    for chunk in chunks:
        assert chunk.lines == lines[chunk.start_line:chunk.end_line + 1]


def test_reconstruccion_sin_perder_ni_duplicar_lineas(small_chunker):
    lines = _lines(137, width=53)
    lines[20] = ""
    lines[45] = "## Un heading"
    lines[46] = ""
    chunks = small_chunker.split("\n".join(lines))

    assert _reconstruct(chunks) == lines
    assert chunks[-1].end_line == len(lines) - 1


def test_chunks_consecutivos_no_dejan_huecos(small_chunker):
    chunks = small_chunker.split("\n".join(_lines(95)))

    for previous, current in zip(chunks, chunks[1:]):
        assert current.start_line <= previous.end_line + 1
        assert current.start_line > previous.start_line


def test_documento_corto_es_un_unico_chunk(chunker):
    chunks = chunker.split("Hola.\n\nAdiós.")

    assert len(chunks) == 1
    assert chunks[0].is_first and chunks[0].is_last
    assert chunks[0].start_line == 0
    assert chunks[0].end_line == 2


# ---------------------------------------------------------------------------
# Punto de corte
# ---------------------------------------------------------------------------


def test_corta_en_linea_vacia_dentro_de_la_ventana(small_chunker):
    lines = _lines(30)
    lines[8] = ""

    chunks = small_chunker.split("\n".join(lines))

    assert chunks[0].end_line == 8
    assert chunks[0].lines[-1] == ""
    # overlap de 2 líneas antes del corte + la línea 9 que no entró
    assert chunks[1].start_line == 7


def test_corta_despues_de_un_heading_markdown(small_chunker):
    lines = _lines(30)
    lines[8] = "## Capítulo dos"

    chunks = small_chunker.split("\n".join(lines))

    assert chunks[0].end_line == 8
    assert chunks[0].lines[-1] == "## Capítulo dos"


def test_linea_vacia_fuera_de_la_ventana_no_se_usa(small_chunker):
    """Solo se busca en el último 30% del buffer; si no, corte exacto."""
    lines = _lines(30)
    lines[2] = ""

    chunks = small_chunker.split("\n".join(lines))

    assert chunks[0].end_line == 9


def test_nunca_corta_dentro_del_overlap_heredado():
    """Un blanco dentro del overlap no puede producir un chunk sin líneas nuevas."""
    chunker = Chunker(ChunkConfig(chunk_size=400, overlap=240, avg_line_length=80))
    lines = _lines(40)
    lines[5] = ""

    chunks = chunker.split("\n".join(lines))

    for previous, current in zip(chunks, chunks[1:]):
        assert current.end_line > previous.end_line
    assert _reconstruct(chunks) == lines


# ---------------------------------------------------------------------------
# Casos límite
# ---------------------------------------------------------------------------


def test_linea_mas_larga_que_el_chunk_va_sola():
    chunker = Chunker(ChunkConfig(chunk_size=100, overlap=0))
    text = "a" * 50 + "\n" + "b" * 1000 + "\n" + "c" * 50

    chunks = chunker.split(text)

    assert len(chunks) == 3
    assert chunks[1].content == "b" * 1000
    assert all(c.content for c in chunks)


def test_linea_vacia_seguida_de_linea_enorme_no_produce_chunk_vacio(chunker):
    text = "\n" + "x" * 9000

    chunks = chunker.split(text)

    assert all(c.content.strip() for c in chunks)
    assert _reconstruct(chunks) == text.split("\n")


def test_no_corta_en_un_blanco_que_deja_el_chunk_sin_texto():
    chunker = Chunker(ChunkConfig(chunk_size=100, overlap=0, search_window=1.0))
    lines = ["", "", "b" * 60, "c" * 60]

    chunks = chunker.split("\n".join(lines))

    assert all(c.content.strip() for c in chunks)
    assert chunks[0].end_line == 2
    assert _reconstruct(chunks) == lines


def test_cola_de_lineas_vacias_se_suma_al_ultimo_chunk():
    chunker = Chunker(ChunkConfig(chunk_size=100, overlap=0))
    text = "a" * 95 + "\n" * 10

    chunks = chunker.split(text)

    assert len(chunks) == 1
    assert chunks[0].content == text
    assert chunks[0].end_line == 10
    assert chunks[0].is_last is True


@pytest.mark.parametrize("text", [
    "\n\n" + "y" * 120 + "\n\n\n" + "z" * 120 + "\n\n\n\n",
    "\n".join(["", "x" * 30] * 20),
    "# T\n\n\n" + "w" * 500 + "\n\n",
])
def test_ningun_chunk_queda_en_blanco(text):
    chunker = Chunker(ChunkConfig(chunk_size=100, overlap=0, search_window=1.0))

    chunks = chunker.split(text)

    assert all(c.content.strip() for c in chunks)
    assert _reconstruct(chunks) == text.split("\n")


def test_documento_solo_de_lineas_vacias_no_pierde_lineas(chunker):
    text = "\n" * 20000

    chunks = chunker.split(text)

    assert chunks
    assert _reconstruct(chunks) == text.split("\n")


def test_texto_vacio_no_lanza_excepcion(chunker):
    chunks = split_into_chunks("")
    assert len(chunks) == 1
    assert chunks[0].content == ""


# ---------------------------------------------------------------------------
# Overlap como transformación pura
# ---------------------------------------------------------------------------


def test_seed_overlap_no_muta_el_buffer_cerrado():
    closed = ["a", "b", "c", "d", "e"]

    seeded = seed_overlap(closed, split_index=4, overlap_lines=2, trigger_line="f")

    assert seeded == ["c", "d", "e", "f"]
    assert closed == ["a", "b", "c", "d", "e"]


def test_seed_overlap_con_overlap_mayor_que_el_buffer():
    assert seed_overlap(["a", "b"], split_index=2, overlap_lines=10, trigger_line="c") == ["a", "b", "c"]


def test_overlap_lines_es_una_aproximacion_por_longitud_media():
    assert ChunkConfig().overlap_lines == 7
    assert ChunkConfig(overlap=0).overlap_lines == 0
    assert ChunkConfig(overlap=100, avg_line_length=40).overlap_lines == 3


@pytest.mark.parametrize("kwargs", [
    {"chunk_size": 0},
    {"overlap": -1},
    {"avg_line_length": 0},
    {"search_window": 1.5},
])
def test_config_invalida_lanza_value_error(kwargs):
    with pytest.raises(ValueError):
        ChunkConfig(**kwargs)
