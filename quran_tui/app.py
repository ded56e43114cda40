"""Main Textual application for quran-tui."""

import logging
from pathlib import Path
from typing import List, Optional

import pyperclip
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Header

from quran_tui.backend import (
    AudioPlayer,
    PlaybackSequencer,
    PlaybackSignal,
    TranslationClient,
    TranslationFetcher,
    TranslationKey,
)
from quran_tui.commands import CommandHandler, CommandResult, parse_command
from quran_tui.commands.parser import get_command_names
from quran_tui.config import DATA_FILE, Config, get_config
from quran_tui.data import (
    Chapter,
    Reciter,
    TranslatedVerse,
    Translator,
    clear_cache,
    get_chapters,
    get_reciter,
    next_reciter,
    save_chapters,
)
from quran_tui.session import ReaderState
from quran_tui.widgets import (
    ChapterList,
    CommandInput,
    ReciterPicker,
    StatusBar,
    TranslatorPicker,
    VerseView,
)

logger = logging.getLogger(__name__)

APP_TITLE = "آوای وحی"


class QuranApp(App):
    """Quran reader with translations and recitation."""

    TITLE = APP_TITLE
    CSS_PATH = Path(__file__).parent / "styles" / "app.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=False),
        Binding("slash", "filter", "Filter", show=False),
        Binding("o", "toggle_sort", "Sort order", show=False),
        Binding("escape", "back", "Back", show=False),
        Binding("j", "next_verse", "Next verse", show=False),
        Binding("k", "prev_verse", "Prev verse", show=False),
        Binding("space", "toggle_play", "Play/pause", show=False),
        Binding("t", "translator_picker", "Translation", show=False),
        Binding("r", "reciter_picker", "Reciter", show=False),
        Binding("R", "next_reciter", "Next reciter", show=False),
        Binding("y", "share", "Share", show=False),
        Binding("d", "toggle_theme", "Theme", show=False),
        Binding("question_mark", "show_help", "Show help", show=False),
    ]

    def __init__(
        self,
        config: Optional[Config] = None,
        fetcher: Optional[TranslationFetcher] = None,
        player: Optional[AudioPlayer] = None,
    ) -> None:
        super().__init__()

        self._config = config or get_config()

        chapters = get_chapters(self._config.chapters_file())
        self._state = ReaderState.from_config(self._config, chapters)

        self._fetcher = fetcher or TranslationFetcher(
            TranslationClient(self._config.api_base_url, self._config.request_timeout),
            format=self._config.translator_format,
            language=self._config.translator_language,
        )
        self._sequencer = PlaybackSequencer(self._state.reciter, self._config.audio_base_url)
        self._player = player or AudioPlayer(self._config.audio_player)
        self._command_handler = CommandHandler(self._state)

        # "list" or "verses"
        self._mode = "list"
        self._in_command_mode = False
        self._in_picker_mode = False

    def compose(self) -> ComposeResult:
        """Create the UI layout."""
        yield Header()
        yield ChapterList(title=APP_TITLE, id="chapter-list")
        with VerticalScroll(id="verse-scroll"):
            yield VerseView(id="verse-view")
        yield CommandInput(commands=get_command_names(), id="command-input")
        yield StatusBar(id="status-bar")

    def on_mount(self) -> None:
        """Initialize the app after mounting."""
        self.query_one("#command-input").display = False
        self.query_one("#verse-scroll").display = False
        self._apply_theme()

        if not self._state.chapters:
            self._status().show_message("No surahs could be loaded")
        elif self._config.chapters_file() is None:
            self._status().show_message("Sample surahs only; :download fetches the full text")

        self._refresh_chapter_list()
        self._chapter_list().focus_list()
        self._update_status()

        self._fetch_translators()

    def on_key(self, event) -> None:
        """Open the command line on ':' outside of inputs."""
        if self._in_command_mode or self._in_picker_mode:
            return
        if self._chapter_list().filter_input.has_focus:
            return
        if event.character == ":":
            event.stop()
            self._enter_command_mode()

    # ==================== Actions ====================

    def action_filter(self) -> None:
        """Jump to the filter box (list view)."""
        if self._mode == "list":
            self._chapter_list().focus_filter()

    def action_toggle_sort(self) -> None:
        """Flip ascending/descending order of the surah list."""
        if self._mode != "list":
            return
        ascending = self._state.toggle_sort()
        self._refresh_chapter_list()
        self._status().show_message("Ascending" if ascending else "Descending")

    def action_back(self) -> None:
        """Return from the verse view to the surah list."""
        if self._mode == "verses":
            self._close_chapter()

    def action_next_verse(self) -> None:
        if self._mode == "verses":
            self._verse_view().next_verse()
            self._update_status()

    def action_prev_verse(self) -> None:
        if self._mode == "verses":
            self._verse_view().prev_verse()
            self._update_status()

    def action_toggle_play(self) -> None:
        """Start reciting from the first verse, or pause."""
        if self._mode != "verses":
            return
        if self._sequencer.is_playing:
            self._handle_playback(self._sequencer.stop())
            return
        chapter = self._state.chapter
        if chapter is None:
            self._status().show_message("Nothing to play")
            return
        self._handle_playback(self._sequencer.start(chapter))

    def action_translator_picker(self) -> None:
        """Open the translation picker."""
        if not self._state.translators:
            self._status().show_message("No translations loaded")
            return
        self._in_picker_mode = True
        current = self._state.translator.identifier if self._state.translator else ""
        picker = TranslatorPicker(self._state.translators, current=current)
        self.mount(picker)
        picker.focus()

    def action_reciter_picker(self) -> None:
        """Open the reciter picker."""
        self._in_picker_mode = True
        picker = ReciterPicker(current=self._state.reciter.id)
        self.mount(picker)
        picker.focus()

    def action_next_reciter(self) -> None:
        """Cycle to the next reciter (R)."""
        reciter = next_reciter(self._state.reciter)
        self._select_reciter(reciter)
        self._status().show_message(f"Reciter: {reciter.name}")

    def action_share(self) -> None:
        """Copy the current verse and its translation to the clipboard."""
        if self._mode != "verses":
            return
        item = self._verse_view().get_current()
        if item is None:
            return

        text = item.verse.text
        if item.translation:
            text += "\n\n" + item.translation

        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException:
            logger.warning("Clipboard unavailable", exc_info=True)
            self._status().show_message("Clipboard not available")
            return
        self._status().show_message(f"Copied verse {item.verse.id}")

    def action_show_help(self) -> None:
        """Show the command and key reference (?)."""
        result = self._command_handler.execute(parse_command("help"))
        self.notify(result.message, title="Help", timeout=30)

    def action_toggle_theme(self) -> None:
        self._state.dark_mode = not self._state.dark_mode
        self._apply_theme()

    # ==================== Chapters ====================

    def _refresh_chapter_list(self) -> None:
        self._chapter_list().show(self._state.visible_chapters())
        self._update_status()

    def _open_chapter(self, chapter_id: int, verse: Optional[int] = None) -> None:
        """Switch to the verse view for ``chapter_id``.

        Jumping to another chapter while reciting carries on at the same
        verse position in the new chapter.
        """
        keep_playing = self._mode == "verses" and self._sequencer.is_playing
        if not keep_playing:
            self._handle_playback(self._sequencer.reset())
        self._state.open_chapter(chapter_id)
        logger.debug("Opening surah %d", chapter_id)

        self._mode = "verses"
        self.query_one("#chapter-list").display = False
        scroll = self.query_one("#verse-scroll", VerticalScroll)
        scroll.display = True
        scroll.scroll_home(animate=False)
        scroll.focus()

        self.sub_title = self._state.chapter_title
        self._render_verses()
        if keep_playing:
            chapter = self._state.chapter
            if chapter is None:
                self._handle_playback(self._sequencer.reset())
            else:
                self._handle_playback(self._sequencer.set_chapter(chapter))
        if verse:
            self._verse_view().move_to(verse - 1)

        self._status().set_mode("verses")
        self._update_status()
        self._request_translation()

    def _close_chapter(self) -> None:
        self._handle_playback(self._sequencer.reset())
        self._state.close_chapter()

        self._mode = "list"
        self.sub_title = ""
        self.query_one("#verse-scroll").display = False
        self.query_one("#chapter-list").display = True
        self._chapter_list().focus_list()

        self._status().set_mode("list")
        self._update_status()

    def _render_verses(self, keep_position: bool = False) -> None:
        self._verse_view().update_content(self._state.aligned_verses(), keep_position)
        if self._sequencer.is_playing:
            self._verse_view().set_reciting(self._sequencer.index)

    # ==================== Translations ====================

    @work(thread=True, group="translators")
    def _fetch_translators(self) -> None:
        translators = self._fetcher.translators()
        self.call_from_thread(self._on_translators_fetched, translators)

    def _on_translators_fetched(self, translators: Optional[List[Translator]]) -> None:
        if translators is None:
            self._status().show_message("Could not load translations")
            return
        changed = self._state.set_translators(translators)
        logger.info("%d translations available", len(translators))
        self._update_status()
        if changed and self._mode == "verses":
            self._request_translation()

    def _request_translation(self) -> None:
        key = self._state.translation_key()
        if key is not None:
            self._fetch_translation(key)

    @work(thread=True, group="translation")
    def _fetch_translation(self, key: TranslationKey) -> None:
        verses = self._fetcher.translation(key)
        self.call_from_thread(self._on_translation_fetched, key, verses)

    def _on_translation_fetched(
        self, key: TranslationKey, verses: Optional[List[TranslatedVerse]]
    ) -> None:
        if not self._state.apply_translation(key, verses):
            if verses is None:
                self._status().show_message(f"Could not load {key.translator_id}")
            else:
                logger.debug("Discarding stale translation %s", key)
            return
        if self._mode == "verses":
            self._render_verses(keep_position=True)

    def _select_translator(self, translator: Translator) -> None:
        self._state.select_translator(translator)
        self._update_status()
        if self._mode == "verses":
            self._request_translation()

    def _reload_translators(self, language: str) -> None:
        self._fetcher.language = language
        self._status().show_message(f"Loading translations ({language})...")
        self._fetch_translators()

    @work(thread=True, group="download", exclusive=True)
    def _download_text(self, edition: str) -> None:
        chapters = self._fetcher.full_text(edition)
        if chapters:
            try:
                save_chapters(chapters, DATA_FILE)
            except OSError:
                logger.warning("Could not save downloaded text", exc_info=True)
        self.call_from_thread(self._on_text_downloaded, chapters)

    def _on_text_downloaded(self, chapters: Optional[List[Chapter]]) -> None:
        if not chapters:
            self._status().show_message("Could not download the full text")
            return
        clear_cache()
        self._state.chapters = chapters
        self._refresh_chapter_list()
        self._status().show_message(f"Loaded {len(chapters)} surahs")

    # ==================== Playback ====================

    def _handle_playback(self, signal: PlaybackSignal) -> None:
        """Hand a sequencer signal to the audio player."""
        view = self._verse_view()
        if signal.action == "play":
            view.set_reciting(signal.index)
            if self._player.play(signal.url):
                self._wait_for_audio(signal.generation)
            else:
                self._sequencer.stop()
                view.set_reciting(None)
                self._status().show_message("No audio player found (install mpv or ffplay)")
        elif signal.action == "stop":
            self._player.stop()
            view.set_reciting(None)
        self._status().set_playing(self._sequencer.is_playing)
        self._update_status()

    @work(thread=True, group="audio")
    def _wait_for_audio(self, generation: int) -> None:
        finished = self._player.wait()
        self.call_from_thread(self._on_audio_finished, generation, finished)

    def _on_audio_finished(self, generation: int, finished: bool) -> None:
        # A replaced or stopped item reports too; only the latest one counts
        if generation != self._sequencer.generation or not self._sequencer.is_playing:
            return
        if not finished:
            self._status().show_message("Playback failed")
            self._handle_playback(self._sequencer.stop())
            return
        self._handle_playback(self._sequencer.on_item_finished())

    def _select_reciter(self, reciter: Reciter) -> None:
        self._state.reciter = reciter
        self._handle_playback(self._sequencer.set_reciter(reciter))
        self._update_status()

    # ==================== Event Handlers ====================

    def on_chapter_list_query_changed(self, event: ChapterList.QueryChanged) -> None:
        self._state.query = event.query
        self._refresh_chapter_list()

    def on_chapter_list_chapter_selected(self, event: ChapterList.ChapterSelected) -> None:
        self._open_chapter(event.chapter_id)

    def on_chapter_list_filter_done(self, event: ChapterList.FilterDone) -> None:
        self._chapter_list().focus_list()

    def on_translator_picker_translator_selected(
        self, event: TranslatorPicker.TranslatorSelected
    ) -> None:
        self._close_picker()
        self._select_translator(event.translator)

    def on_translator_picker_cancelled(self, event: TranslatorPicker.Cancelled) -> None:
        self._close_picker()

    def on_reciter_picker_reciter_selected(self, event: ReciterPicker.ReciterSelected) -> None:
        self._close_picker()
        self._select_reciter(event.reciter)

    def on_reciter_picker_cancelled(self, event: ReciterPicker.Cancelled) -> None:
        self._close_picker()

    def on_command_input_command_submitted(self, event: CommandInput.CommandSubmitted) -> None:
        self._close_command_mode()
        command = event.command
        # A bare number opens that surah
        if command.isdigit():
            command = f"goto {command}"
        result = self._command_handler.execute(parse_command(command))
        self._handle_command_result(result)

    def on_command_input_command_cancelled(self, event: CommandInput.CommandCancelled) -> None:
        self._close_command_mode()

    # ==================== Helper Methods ====================

    def _chapter_list(self) -> ChapterList:
        return self.query_one("#chapter-list", ChapterList)

    def _verse_view(self) -> VerseView:
        return self.query_one("#verse-view", VerseView)

    def _status(self) -> StatusBar:
        return self.query_one("#status-bar", StatusBar)

    def _apply_theme(self) -> None:
        self.theme = "textual-dark" if self._state.dark_mode else "textual-light"

    def _enter_command_mode(self) -> None:
        self._in_command_mode = True
        cmd = self.query_one("#command-input", CommandInput)
        cmd.display = True
        cmd.reset()
        cmd.focus()
        self._status().set_mode("command")

    def _close_command_mode(self) -> None:
        self._in_command_mode = False
        self.query_one("#command-input").display = False
        self._status().set_mode(self._mode)
        self._restore_focus()
        self._update_status()

    def _close_picker(self) -> None:
        self._in_picker_mode = False
        for picker in self.query("TranslatorPicker, ReciterPicker"):
            picker.remove()
        self._restore_focus()

    def _restore_focus(self) -> None:
        if self._mode == "verses":
            self.query_one("#verse-scroll").focus()
        else:
            self._chapter_list().focus_list()

    def _update_status(self) -> None:
        """Update the status bar with the current position."""
        status = self._status()
        if self._mode == "verses":
            chapter = self._state.chapter
            if chapter is None:
                status.set_location(self._state.chapter_title)
            else:
                view = self._verse_view()
                status.set_location(
                    f"{chapter.transliteration} {view.current_index + 1}/{len(chapter.verses)}"
                )
            status.set_sources(self._state.translator_label, self._state.reciter.name)
        else:
            arrow = "↑" if self._state.ascending else "↓"
            shown = len(self._state.visible_chapters())
            status.set_location(f"{shown}/{len(self._state.chapters)} surahs {arrow}")

    def _save_settings(self) -> None:
        self._config.dark_mode = self._state.dark_mode
        self._config.ascending = self._state.ascending
        self._config.default_reciter = self._state.reciter.id
        self._config.translator_language = self._fetcher.language
        if self._state.translator:
            self._config.default_translator = self._state.translator.identifier
        try:
            self._config.save()
        except OSError:
            logger.warning("Could not save settings", exc_info=True)
            self._status().show_message("Could not save settings")
            return
        self._status().show_message("Settings saved")

    def _handle_command_result(self, result: CommandResult) -> None:
        """Handle command execution result."""
        status = self._status()
        if not result.success:
            status.show_message(result.message)
            return

        action = result.action
        data = result.data or {}

        if action == "quit":
            self.exit()
        elif action == "goto":
            self._open_chapter(data["chapter"], data.get("verse"))
        elif action == "list":
            self.action_back()
        elif action == "filter":
            if self._mode == "verses":
                self._close_chapter()
            self._state.query = data.get("query", "")
            self._chapter_list().set_query(self._state.query)
            self._refresh_chapter_list()
        elif action == "sort":
            self._state.ascending = data.get("ascending", True)
            self._refresh_chapter_list()
        elif action == "translator_picker":
            self.action_translator_picker()
        elif action == "set_translator":
            translator = self._state.find_translator(data.get("translator", ""))
            if translator:
                self._select_translator(translator)
        elif action == "reload_translators":
            self._reload_translators(data["language"])
        elif action == "reciter_picker":
            self.action_reciter_picker()
        elif action == "set_reciter":
            reciter = get_reciter(data.get("reciter", 0))
            if reciter:
                self._select_reciter(reciter)
        elif action == "play":
            if self._mode == "verses" and not self._sequencer.is_playing:
                self.action_toggle_play()
        elif action == "stop":
            self._handle_playback(self._sequencer.stop())
        elif action == "share":
            self.action_share()
        elif action == "help":
            self.notify(result.message, title="Help", timeout=30)
        elif action == "toggle_theme":
            self.action_toggle_theme()
        elif action == "write":
            self._save_settings()
        elif action == "download":
            edition = data.get("edition") or self._config.text_edition
            self._status().show_message(f"Downloading {edition}...")
            self._download_text(edition)
        elif result.message:
            status.show_message(result.message)
