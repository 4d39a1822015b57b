from profilesync.ingest.tokenizer import tokenize_line


def test_plain_fields_are_split_on_commas():
    assert tokenize_line("a,b,c") == ["a", "b", "c"]


def test_quoted_segment_keeps_embedded_comma():
    assert tokenize_line('a,"b,c",d') == ["a", "b,c", "d"]


def test_doubled_quotes_are_not_an_escape():
    assert tokenize_line('"","",""') == ["", "", ""]
    assert tokenize_line('say ""hi""') == ["say hi"]


def test_fields_are_trimmed():
    assert tokenize_line('  a , " b " ,c\r') == ["a", "b", "c"]


def test_empty_and_whitespace_lines_yield_one_empty_field():
    assert tokenize_line("") == [""]
    assert tokenize_line("   ") == [""]


def test_trailing_comma_produces_empty_last_field():
    assert tokenize_line("a,b,") == ["a", "b", ""]


def test_unterminated_quote_swallows_rest_of_line():
    assert tokenize_line('a,"b,c') == ["a", "b,c"]
