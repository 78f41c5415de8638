from app.utils.red_flags import detect_red_flags


def test_no_flags_in_ordinary_myth():
    assert detect_red_flags("Does drinking cold water cause a cold?") == (False, [])


def test_empty_text():
    assert detect_red_flags("") == (False, [])


def test_english_flags():
    has_flags, categories = detect_red_flags("He has chest pain and difficulty breathing")
    assert has_flags
    assert categories == ["cardiac", "breathing"]


def test_hinglish_and_devanagari_flags():
    assert detect_red_flags("saanp ne kaat liya")[1] == ["poisoning"]
    assert detect_red_flags("दादी बेहोश हो गई")[1] == ["unconscious"]
