from pixcharge.normalize import normalize, strip_accents, truncate


class TestStripAccents:
    def test_no_accents(self):
        assert strip_accents("Hello") == "Hello"

    def test_accents(self):
        assert strip_accents("João") == "Joao"

    def test_cedilla(self):
        assert strip_accents("Março") == "Marco"


class TestNormalize:
    def test_accents_and_symbols(self):
        assert normalize("Café & açúcar - R$ 15,50") == "Cafe acucar - R 15,50"

    def test_keeps_hyphen_period_comma(self):
        assert normalize("Av. Brasil, 123 - Sala 4") == "Av. Brasil, 123 - Sala 4"

    def test_collapses_and_trims_whitespace(self):
        assert normalize("  Maria   da\tSilva \n") == "Maria da Silva"

    def test_drops_at_sign(self):
        assert normalize("contato@loja") == "contatoloja"

    def test_non_latin_letters_dropped(self):
        assert normalize("Łódź") == "odz"

    def test_output_is_ascii(self):
        result = normalize("Ação Nº 5 • Brasília ™")
        assert result.isascii()
        assert result == "Acao N 5 Brasilia"

    def test_only_symbols_becomes_empty(self):
        assert normalize("$$ && @@") == ""


class TestTruncate:
    def test_short_text_untouched(self):
        assert truncate("Sao Paulo", 15) == "Sao Paulo"

    def test_cuts_to_limit(self):
        assert truncate("Rio de Janeiro - RJ", 15) == "Rio de Janeiro "

    def test_does_not_split_multibyte_character(self):
        # "é" is two bytes; the cut lands in its middle
        assert truncate("abcé", 4) == "abc"
