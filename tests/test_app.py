import pygame

from typepractice.app import PracticeApp, main, parse_args
from typepractice.config import load_config
from typepractice.progress import TypingProgress
from typepractice.render import StyleTag
from typepractice.ui.common import build_styles, is_quit_chord, key_to_char


def _key(key, unicode="", mod=0):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=mod, unicode=unicode)


def test_key_to_char_passes_printable_characters():
    assert key_to_char(_key(pygame.K_a, "a")) == "a"
    assert key_to_char(_key(pygame.K_a, "A", mod=pygame.KMOD_SHIFT)) == "A"
    assert key_to_char(_key(pygame.K_SPACE, " ")) == " "


def test_key_to_char_translates_enter_and_tab():
    assert key_to_char(_key(pygame.K_RETURN, "\r")) == "\n"
    assert key_to_char(_key(pygame.K_KP_ENTER, "\r")) == "\n"
    assert key_to_char(_key(pygame.K_TAB, "\t")) == "\t"


def test_key_to_char_drops_control_keys_and_chords():
    assert key_to_char(_key(pygame.K_BACKSPACE, "\x08")) is None
    assert key_to_char(_key(pygame.K_LEFT)) is None
    assert key_to_char(_key(pygame.K_s, "s", mod=pygame.KMOD_LCTRL)) is None
    assert key_to_char(pygame.event.Event(pygame.KEYUP, key=pygame.K_a, mod=0, unicode="a")) is None


def test_quit_chord_accepts_escape_and_ctrl_c():
    assert is_quit_chord(_key(pygame.K_ESCAPE, "\x1b"))
    assert is_quit_chord(_key(pygame.K_c, "\x03", mod=pygame.KMOD_LCTRL))
    assert not is_quit_chord(_key(pygame.K_c, "c"))


def test_build_styles_covers_every_tag():
    styles = build_styles({"current": {"fg": [1, 2, 3], "bg": [4, 5, 6], "bold": True}, "typed": {"fg": "bad"}})
    assert set(styles) == set(StyleTag)
    assert styles[StyleTag.CURRENT].fg == (1, 2, 3)
    assert styles[StyleTag.CURRENT].bg == (4, 5, 6)
    assert styles[StyleTag.CURRENT].bold
    assert styles[StyleTag.TYPED].fg == (230, 230, 230)
    assert styles[StyleTag.UNTYPED].bg is None


def test_parse_args_reads_path_and_flags(tmp_path):
    args = parse_args([str(tmp_path / "text.txt"), "--fullscreen"])
    assert args.path == tmp_path / "text.txt"
    assert args.fullscreen
    assert args.config is None


def _isolated_config(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"data_root: {tmp_path / 'data'}\nlogging:\n  file: false\n", encoding="utf-8")
    monkeypatch.setenv("TYPEPRACTICE_CONFIG", str(config_path))


def test_main_reports_missing_file(tmp_path, monkeypatch, capsys):
    _isolated_config(tmp_path, monkeypatch)
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_main_rejects_empty_practice_text(tmp_path, monkeypatch, capsys):
    _isolated_config(tmp_path, monkeypatch)
    practice = tmp_path / "empty.txt"
    practice.write_text("\n", encoding="utf-8")
    assert main([str(practice)]) == 1
    assert "empty" in capsys.readouterr().err


def _run_session(reference, events, tmp_path, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    _isolated_config(tmp_path, monkeypatch)
    progress = TypingProgress(reference)
    app = PracticeApp(progress, load_config())
    try:
        for event in events:
            pygame.event.post(event)
        completed = app.run()
    finally:
        pygame.quit()
    return progress, completed


def test_run_returns_true_when_text_is_finished(tmp_path, monkeypatch):
    events = [
        _key(pygame.K_x, "x"),
        _key(pygame.K_a, "a"),
        _key(pygame.K_RETURN, "\r"),
        _key(pygame.K_b, "b"),
    ]
    progress, completed = _run_session("a\nb", events, tmp_path, monkeypatch)
    assert completed
    assert progress.is_complete()
    assert progress.typed == "a\nb"


def test_run_stops_on_escape(tmp_path, monkeypatch):
    events = [_key(pygame.K_a, "a"), _key(pygame.K_ESCAPE, "\x1b"), _key(pygame.K_b, "b")]
    progress, completed = _run_session("abc", events, tmp_path, monkeypatch)
    assert not completed
    assert progress.typed == "a"


def test_run_stops_on_ctrl_c_without_typing_c(tmp_path, monkeypatch):
    events = [_key(pygame.K_c, "\x03", mod=pygame.KMOD_LCTRL)]
    progress, completed = _run_session("cat", events, tmp_path, monkeypatch)
    assert not completed
    assert progress.typed == ""
    assert progress.mistyped == ""


def test_run_stops_when_window_is_closed(tmp_path, monkeypatch):
    events = [_key(pygame.K_z, "z"), pygame.event.Event(pygame.QUIT)]
    progress, completed = _run_session("ab", events, tmp_path, monkeypatch)
    assert not completed
    assert progress.mistyped == "z"


def test_main_exits_zero_after_completed_session(tmp_path, monkeypatch, capsys):
    _isolated_config(tmp_path, monkeypatch)
    practice = tmp_path / "practice.txt"
    practice.write_text("ab\n", encoding="utf-8")
    sessions = []

    class FinishedApp:
        def __init__(self, progress, config):
            sessions.append(progress.reference)

        def run(self):
            return True

    monkeypatch.setattr("typepractice.app.PracticeApp", FinishedApp)
    assert main([str(practice)]) == 0
    assert sessions == ["ab"]
    assert "Practice complete: 2 characters typed." in capsys.readouterr().out


def test_main_falls_back_to_defaults_on_broken_config(tmp_path, monkeypatch, capsys):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("window: [unclosed\n", encoding="utf-8")
    monkeypatch.setenv("TYPEPRACTICE_CONFIG", str(config_path))
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "does not exist" in capsys.readouterr().err
