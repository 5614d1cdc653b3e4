import pygame
import pytest

from veggierun.audio import AudioError, Music, SoundEffect


class FakeStream:
    def __init__(self):
        self.calls = []
        self.busy = False

    def load(self, path):
        self.calls.append(("load", path))

    def play(self, loops):
        self.calls.append(("play", loops))
        self.busy = True

    def pause(self):
        self.calls.append(("pause",))
        self.busy = False

    def unpause(self):
        self.calls.append(("unpause",))
        self.busy = True

    def stop(self):
        self.calls.append(("stop",))
        self.busy = False

    def get_busy(self):
        return self.busy


class BrokenStream(FakeStream):
    def play(self, loops):
        raise pygame.error("no device")


class FakeChunk:
    def __init__(self, path):
        self.path = path
        self.plays = []
        self.stopped = False

    def play(self, loops=0):
        self.plays.append(loops)

    def stop(self):
        self.stopped = True


@pytest.fixture
def track(tmp_path):
    path = tmp_path / "theme.mp3"
    path.write_bytes(b"ID3")
    return path


def test_music_load_missing_file(tmp_path):
    music = Music(FakeStream())
    with pytest.raises(AudioError):
        music.load(tmp_path / "absent.mp3")
    assert music.loaded is False


def test_music_play_loads_and_loops_forever_by_default(track):
    stream = FakeStream()
    music = Music(stream)
    music.load(track)
    music.play()
    assert stream.calls == [("load", str(track)), ("play", -1)]


def test_music_play_without_track_does_nothing():
    stream = FakeStream()
    Music(stream).play(2)
    assert stream.calls == []


def test_music_play_failure_raises(track):
    music = Music(BrokenStream())
    music.load(track)
    with pytest.raises(AudioError):
        music.play()


def test_music_pause_only_when_playing(track):
    stream = FakeStream()
    music = Music(stream)
    music.pause()
    assert stream.calls == []
    music.load(track)
    music.play(0)
    music.pause()
    assert stream.calls[-1] == ("pause",)


def test_music_resume_only_after_pause(track):
    stream = FakeStream()
    music = Music(stream)
    music.load(track)
    music.play()
    music.resume()
    assert ("unpause",) not in stream.calls
    music.pause()
    music.resume()
    assert stream.calls[-1] == ("unpause",)


def test_music_stop_and_free(track):
    stream = FakeStream()
    music = Music(stream)
    music.load(track)
    music.play()
    music.stop()
    assert stream.busy is False
    music.free()
    stream.calls.clear()
    music.play()
    assert stream.calls == []
    assert music.loaded is False


def test_sound_load_and_play():
    chunks = []

    def loader(path):
        chunk = FakeChunk(path)
        chunks.append(chunk)
        return chunk

    sound = SoundEffect(loader)
    assert sound.loaded is False
    sound.load("sfx/click.wav")
    assert sound.loaded is True
    sound.play()
    sound.play(3)
    assert len(chunks) == 1
    assert chunks[0].path == "sfx/click.wav"
    assert chunks[0].plays == [0, 3]


def test_sound_reload_frees_previous():
    chunks = []

    def loader(path):
        chunk = FakeChunk(path)
        chunks.append(chunk)
        return chunk

    sound = SoundEffect(loader)
    sound.load("a.wav")
    sound.load("b.wav")
    assert chunks[0].stopped is True
    assert sound.loaded is True


def test_sound_load_failure_raises():
    def loader(path):
        raise pygame.error("bad file")

    sound = SoundEffect(loader)
    with pytest.raises(AudioError):
        sound.load("broken.wav")
    assert sound.loaded is False


def test_sound_play_after_free_does_nothing():
    chunk = FakeChunk("x.wav")
    sound = SoundEffect(lambda path: chunk)
    sound.load("x.wav")
    sound.free()
    sound.play()
    assert chunk.plays == []
    assert chunk.stopped is True
    assert sound.loaded is False