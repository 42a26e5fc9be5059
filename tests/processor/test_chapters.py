from autoebook.processor.chapters import (
    BODY_TITLE,
    INTRO_TITLE,
    split_by_chapters,
    split_into_chapters,
)


class TestSplitByChapters:

    def test_preambulo_se_convierte_en_introduccion(self):
        text = "Some preface text.\n\nCHAPTER ONE\nFirst.\n\n# Part Two\nSecond."

        chapters = split_by_chapters(text)

        assert [c.title for c in chapters] == [INTRO_TITLE, "CHAPTER ONE", "Part Two"]
        assert chapters[0].synthetic
        assert chapters[0].content == "Some preface text."
        assert chapters[1].level == 2
        assert chapters[1].start_line == 2
        assert chapters[1].content == "First."
        assert chapters[2].level == 1
        assert chapters[2].start_line == 5
        assert chapters[2].content == "Second."

    def test_preambulo_en_blanco_se_descarta(self):
        chapters = split_by_chapters("\n\n# Uno\ncuerpo")

        assert [c.title for c in chapters] == ["Uno"]
        assert not chapters[0].synthetic

    def test_sin_headings_todo_es_un_capitulo_sintetico(self):
        chapters = split_by_chapters("just some text.\nmore text.")

        assert len(chapters) == 1
        assert chapters[0].title == BODY_TITLE
        assert chapters[0].synthetic
        assert chapters[0].content == "just some text.\nmore text."

    def test_headings_de_nivel_3_no_abren_capitulo(self):
        chapters = split_by_chapters("# A\ntext\n### Sub\nmore")

        assert len(chapters) == 1
        assert chapters[0].content == "text\n### Sub\nmore"

    def test_texto_vacio_no_tiene_capitulos(self):
        assert split_by_chapters("") == []
        assert split_by_chapters("  \n\n ") == []

    def test_contenido_se_recorta(self):
        chapters = split_by_chapters("# A\n\n\ncuerpo\n\n")

        assert chapters[0].content == "cuerpo"


class TestSplitIntoChapters:

    def test_ignora_la_deteccion_heuristica(self):
        chapters = split_into_chapters("PROLOGUE\ntext\n## Real\nbody")

        assert [c.title for c in chapters] == [INTRO_TITLE, "Real"]
        assert chapters[0].content == "PROLOGUE\ntext"
        assert chapters[1].level == 2
        assert chapters[1].start_line == 2

    def test_sin_headings_devuelve_el_documento_entero(self):
        chapters = split_into_chapters("  solo texto\nsin títulos  ")

        assert len(chapters) == 1
        assert chapters[0].title == BODY_TITLE
        assert chapters[0].synthetic
        assert chapters[0].content == "solo texto\nsin títulos"

    def test_capitulos_vacios_se_descartan(self):
        chapters = split_into_chapters("# A\n# B\ncontenido")

        assert [c.title for c in chapters] == ["B"]

    def test_nunca_devuelve_lista_vacia(self):
        chapters = split_into_chapters("# A\n# B")

        assert len(chapters) == 1
        assert chapters[0].title == BODY_TITLE
        assert chapters[0].content == "# A\n# B"

    def test_texto_vacio_tambien_produce_un_capitulo(self):
        assert len(split_into_chapters("")) == 1

    def test_nivel_3_es_contenido(self):
        chapters = split_into_chapters("# A\n### Sub\ncuerpo")

        assert len(chapters) == 1
        assert chapters[0].content == "### Sub\ncuerpo"
