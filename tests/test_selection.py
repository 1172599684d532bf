# tests/test_selection.py
import io

import pytest
from PIL import Image

from instacaption.ui.previews import PreviewRegistry
from instacaption.ui.selection import SelectedFile, SelectionStore


def png_bytes(color="red"):
    buf = io.BytesIO()
    Image.new("RGB", (32, 32), color).save(buf, format="PNG")
    return buf.getvalue()


def make_file(name, mime="image/png", data=None):
    return SelectedFile(name=name, mime_type=mime, data=data if data is not None else png_bytes())


class RecordingRegistry(PreviewRegistry):
    # counts create/release calls per handle
    def __init__(self):
        super().__init__(size=16)
        self.created = []
        self.released = []

    def create(self, name, data):
        handle = super().create(name, data)
        self.created.append(handle)
        return handle

    def release(self, handle):
        self.released.append(handle)
        super().release(handle)


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, files):
        self.calls.append(files)


def names(files):
    return [f.name for f in files]


def test_cap_and_order_across_calls():
    rec = Recorder()
    store = SelectionStore(rec, max_files=3)
    store.add_files([make_file("a"), make_file("b")])
    store.add_files([make_file("c"), make_file("d")])  # "d" dropped, earliest wins
    store.add_files([make_file("e")])
    assert names(store.files) == ["a", "b", "c"]
    assert [names(c) for c in rec.calls] == [["a", "b"], ["a", "b", "c"], ["a", "b", "c"]]
    assert store.is_full


def test_accepted_types_is_substring_filter():
    store = SelectionStore(Recorder(), max_files=10, accepted_types=["image/png", "image/jpeg"])
    store.add_files([
        make_file("one.png", "image/png"),
        make_file("notes.txt", "text/plain"),
        make_file("two.jpg", "image/jpeg"),
    ])
    assert names(store.files) == ["one.png", "two.jpg"]

    # substring, not equality
    loose = SelectionStore(Recorder(), accepted_types=["image"])
    loose.add_files([make_file("x.gif", "image/gif"), make_file("y.pdf", "application/pdf")])
    assert names(loose.files) == ["x.gif"]


def test_empty_filter_rejects_everything_but_still_notifies():
    rec = Recorder()
    store = SelectionStore(rec, accepted_types=[])
    store.add_files([make_file("a.png")])
    assert len(store) == 0
    assert rec.calls == [[]]


def test_remove_file_keeps_relative_order():
    rec = Recorder()
    store = SelectionStore(rec)
    store.add_files([make_file(n) for n in "abcd"])
    store.remove_file(1)
    assert names(store.files) == ["a", "c", "d"]
    assert names(rec.calls[-1]) == ["a", "c", "d"]
    assert len(rec.calls) == 2


@pytest.mark.parametrize("index", [3, 99, -1])
def test_remove_out_of_range_is_noop(index):
    rec = Recorder()
    store = SelectionStore(rec)
    store.add_files([make_file(n) for n in "abc"])
    store.remove_file(index)
    assert names(store.files) == ["a", "b", "c"]
    assert len(rec.calls) == 2
    assert names(rec.calls[-1]) == ["a", "b", "c"]


def test_notification_is_a_fresh_full_list():
    rec = Recorder()
    store = SelectionStore(rec)
    store.add_files([make_file("a")])
    rec.calls[0].append("junk")  # caller mutation must not leak into the store
    store.add_files([make_file("b")])
    assert names(store.files) == ["a", "b"]
    assert names(rec.calls[1]) == ["a", "b"]


def test_duplicate_names_are_kept():
    store = SelectionStore(Recorder())
    store.add_files([make_file("same.png"), make_file("same.png")])
    assert names(store.files) == ["same.png", "same.png"]


def test_previews_are_lazy_and_single():
    reg = RecordingRegistry()
    store = SelectionStore(Recorder(), previews=reg)
    store.add_files([make_file("a.png"), make_file("doc.txt", "text/plain")])
    assert reg.created == []

    rows = store.render()
    store.render()
    assert len(reg.created) == 1
    assert rows[0][2] == reg.created[0]
    assert rows[1][2] is None
    assert reg.get(rows[0][2]) is not None


def test_remove_releases_that_files_preview():
    reg = RecordingRegistry()
    store = SelectionStore(Recorder(), previews=reg)
    store.add_files([make_file("a.png"), make_file("b.png")])
    store.render()
    a_handle, b_handle = reg.created
    store.remove_file(0)
    assert reg.released == [a_handle]
    assert reg.is_live(b_handle)


def test_clear_all_releases_each_handle_once():
    reg = RecordingRegistry()
    rec = Recorder()
    store = SelectionStore(rec, previews=reg)
    store.add_files([make_file("a.png"), make_file("b.png"), make_file("c.txt", "text/plain")])
    store.render()
    store.clear_all()
    assert sorted(reg.released) == sorted(reg.created)
    assert len(reg.released) == 2
    assert reg.live_handles == 0
    assert rec.calls[-1] == []
    assert len(store) == 0


def test_close_releases_and_blocks_mutation():
    reg = RecordingRegistry()
    with SelectionStore(Recorder(), previews=reg) as store:
        store.add_files([make_file("a.png")])
        store.render()
    assert reg.released == reg.created
    store.close()  # second close is harmless
    assert len(reg.released) == 1
    with pytest.raises(RuntimeError):
        store.add_files([make_file("b.png")])


def test_max_files_must_be_positive():
    with pytest.raises(ValueError):
        SelectionStore(Recorder(), max_files=0)


def test_from_bytes_guesses_mime_type():
    f = SelectedFile.from_bytes("photo.jpg", b"\xff\xd8")
    assert f.mime_type == "image/jpeg"
    assert f.size == 2
    assert SelectedFile.from_bytes("blob", b"x").mime_type == "application/octet-stream"


@pytest.mark.parametrize("index", [-1, 2])
def test_preview_for_rejects_out_of_range_index(index):
    reg = RecordingRegistry()
    store = SelectionStore(Recorder(), previews=reg)
    store.add_files([make_file("a.png"), make_file("b.png")])
    with pytest.raises(IndexError):
        store.preview_for(index)
    assert reg.created == []
