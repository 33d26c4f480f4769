"""
WidgetRenderer driving a real BrowserWidget (offscreen platform).
"""

import pytest
from PyQt6.QtCore import Qt
from PyQt6.QtTest import QTest

from reelview.core.models import Trailer, ViewKind
from reelview.ui.browser import (
    ADD_FAVORITE_TEXT, REMOVE_FAVORITE_TEXT, BrowserWidget, WidgetRenderer
)

from conftest import make_movie


@pytest.fixture
def widget(qapp):
    widget = BrowserWidget()
    widget.show()
    yield widget
    widget.close()


@pytest.fixture
def view(widget):
    return WidgetRenderer(widget)


def test_show_movies_replaces_or_appends(widget, view):
    view.show_movies([make_movie(1), make_movie(2)], append=False)
    view.show_movies([make_movie(3)], append=True)
    assert widget.grid.count() == 3

    view.show_movies([make_movie(4)], append=False)
    assert widget.grid.count() == 1
    assert widget.grid.item(0).data(Qt.ItemDataRole.UserRole) == 4


def test_message_replaces_grid(widget, view):
    view.show_movies([make_movie(1)], append=False)
    view.show_message("No movies found.")

    assert widget.grid.count() == 0
    assert widget.grid.isHidden()
    assert widget.message_label.text() == "No movies found."

    view.show_movies([make_movie(2)], append=False)
    assert not widget.grid.isHidden()
    assert widget.message_label.isHidden()


def test_card_click_emits_movie_id(widget, view):
    activated = []
    widget.movie_activated.connect(activated.append)
    view.show_movies([make_movie(42)], append=False)

    widget.grid.itemClicked.emit(widget.grid.item(0))

    assert activated == [42]


def test_programmatic_clear_does_not_emit_edit(widget, view):
    edits = []
    widget.search_edited.connect(edits.append)

    QTest.keyClicks(widget.search_input, "alien")
    view.clear_search_input()

    assert edits == ["a", "al", "ali", "alie", "alien"]
    assert widget.search_input.text() == ""


def test_return_submits_search(widget):
    submitted = []
    widget.search_submitted.connect(submitted.append)

    widget.search_input.setText("heat")
    QTest.keyClick(widget.search_input, Qt.Key.Key_Return)

    assert submitted == ["heat"]


def test_detail_pane(widget, view):
    view.show_view(ViewKind.DETAILS)
    assert widget.pages.currentIndex() == BrowserWidget.DETAIL_PAGE

    view.show_detail(make_movie(7, "Heat", release_date="1995-12-15", vote_average=8.3), None, False)
    panel = widget.detail_panel
    assert panel.title_label.text() == "Heat (1995)"
    assert "8.3 / 10" in panel.rating_label.text()
    assert panel.btn_favorite.text() == ADD_FAVORITE_TEXT
    assert panel.trailer_section.isHidden()

    view.set_favorite_state(True)
    assert panel.btn_favorite.text() == REMOVE_FAVORITE_TEXT

    view.show_detail(make_movie(8), Trailer(key="k", site="YouTube", type="Teaser"), True)
    assert not panel.trailer_section.isHidden()

    view.show_detail_error("Could not load details.")
    assert panel.error_label.text() == "Could not load details."
    assert panel.btn_favorite.isHidden()


def test_load_more_and_spinner_visibility(widget, view):
    view.set_load_more_visible(True)
    view.set_loading(True)
    assert not widget.btn_load_more.isHidden()
    assert not widget.spinner.isHidden()

    view.set_load_more_visible(False)
    view.set_loading(False)
    assert widget.btn_load_more.isHidden()
    assert widget.spinner.isHidden()
