from autoebook.processor.models import ChunkHints
from autoebook.router.prompt_builder import (
    build_chunk_analysis_prompt,
    build_document_analysis_prompt,
)


def make_hints(**overrides) -> ChunkHints:
    values = dict(start_line=100, end_line=199, is_first=False, is_last=False)
    values.update(overrides)
    return ChunkHints(**values)


class TestChunkPrompt:

    def test_incluye_el_fragmento_y_su_posicion(self):
        prompt = build_chunk_analysis_prompt("texto del chunk", 1, 3, make_hints())

        assert "texto del chunk" in prompt
        assert "Fragmento 2 de 3" in prompt
        assert "líneas 101 a 200" in prompt

    def test_marca_primer_fragmento(self):
        prompt = build_chunk_analysis_prompt("x", 0, 3, make_hints(is_first=True))

        assert "PRIMER fragmento" in prompt
        assert "ÚLTIMO fragmento" not in prompt

    def test_marca_ultimo_fragmento(self):
        prompt = build_chunk_analysis_prompt("x", 2, 3, make_hints(is_last=True))

        assert "ÚLTIMO fragmento" in prompt

    def test_pide_posiciones_relativas(self):
        prompt = build_chunk_analysis_prompt("x", 1, 3, make_hints())

        assert "RELATIVOS a este fragmento" in prompt

    def test_contrato_json_con_llaves_literales(self):
        prompt = build_chunk_analysis_prompt("x", 1, 3, make_hints())

        for key in ("contentType", "tableOfContents", "imagePoints", "generatedPrompt"):
            assert f'"{key}"' in prompt
        assert "{{" not in prompt

    def test_sin_hints_usa_el_prompt_de_documento(self):
        assert build_chunk_analysis_prompt("doc", 0, 1) == build_document_analysis_prompt("doc")


class TestDocumentPrompt:

    def test_incluye_el_manuscrito_y_las_reglas(self):
        prompt = build_document_analysis_prompt("Érase una vez")

        assert "Érase una vez" in prompt
        assert "entre 3 y 8 imágenes" in prompt
        assert "Fragmento" not in prompt

    def test_contenido_con_llaves_no_rompe_el_formato(self):
        prompt = build_document_analysis_prompt("usa {variable} y {{doble}}")

        assert "usa {variable} y {{doble}}" in prompt
