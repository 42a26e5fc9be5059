from autoebook.processor.readability import analyze_readability, compare_readability

NORMAL_LINE = "This is a normal sentence of moderate length here."


def test_documento_limpio_puntua_100():
    report = analyze_readability("# Título\n\nUn párrafo corto.\n\nOtro párrafo.")

    assert report.score == 100
    assert report.issues == []
    assert report.suggestions == []


def test_lineas_largas_penalizan_dos_veces():
    """Líneas > 200 caracteres (-20) y longitud media > 150 (-15)."""
    text = "\n".join(["word " * 50] * 10)

    report = analyze_readability(text)

    assert report.score == 65
    assert len(report.issues) == 2
    assert len(report.suggestions) == 2


def test_documento_largo_sin_headings():
    text = "\n".join([NORMAL_LINE] * 70)
    assert len(text) > 3000

    report = analyze_readability(text)

    assert report.score == 85
    assert report.issues == ["No se detectaron capítulos ni títulos"]


def test_documento_corto_sin_headings_no_penaliza():
    assert analyze_readability("\n".join([NORMAL_LINE] * 5)).score == 100


def test_demasiados_espacios_dobles():
    report = analyze_readability("a  b\n" * 21)

    assert report.score == 90
    assert report.suggestions == ["Activa la eliminación de espacios"]


def test_veinte_espacios_dobles_aun_no_penalizan():
    assert analyze_readability("a  b\n" * 20).score == 100


def test_score_siempre_en_rango():
    worst = ("x" * 300 + "  ") * 40
    report = analyze_readability(worst)

    assert 0 <= report.score <= 100
    assert len(report.issues) == len(report.suggestions)


def test_empeorar_un_documento_nunca_sube_el_score():
    good = "# Título\n\nPárrafo corto.\n"
    worse = good + "\n".join(["palabra " * 40] * 25)

    assert analyze_readability(worse).score <= analyze_readability(good).score


def test_comparacion_antes_despues():
    original = "\n".join(["word " * 50] * 10)
    processed = "# Título\n\nTexto ordenado."

    comparison = compare_readability(original, processed)

    assert comparison.original.score == 65
    assert comparison.processed.score == 100
    assert comparison.improvement == 35
