from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import pygame

from falling_blocks.game import Sound

logger = logging.getLogger(__name__)

SOUND_FILES: Dict[Sound, str] = {
    Sound.ROTATE: "sound/rotate.ogg",
    Sound.PLACE: "sound/place.ogg",
    Sound.CLEAR: "sound/clear.wav",
}
MUSIC_FILE = "music/game.mp3"


class PygameAudio:
    """Best-effort sound effects; a missing file or busy device never interrupts play."""

    def __init__(self, assets_dir: Optional[Path] = None, music_volume: float = 0.0) -> None:
        self.assets_dir = Path(assets_dir) if assets_dir is not None else Path("assets")
        self.music_volume = float(music_volume)
        self.clips: Dict[Sound, pygame.mixer.Sound] = {}
        self._music_loaded = False

    def load(self) -> None:
        for sound, rel in SOUND_FILES.items():
            path = self.assets_dir / rel
            if not path.is_file():
                logger.debug("no clip for %s at %s", sound.value, path)
                continue
            try:
                self.clips[sound] = pygame.mixer.Sound(str(path))
            except pygame.error as exc:
                logger.debug("could not load %s: %s", path, exc)
        music = self.assets_dir / MUSIC_FILE
        if music.is_file():
            try:
                pygame.mixer.music.load(str(music))
                pygame.mixer.music.set_volume(self.music_volume)
                self._music_loaded = True
            except pygame.error as exc:
                logger.debug("could not load %s: %s", music, exc)

    def play(self, sound: Sound) -> None:
        try:
            if sound is Sound.MUSIC:
                if self._music_loaded:
                    pygame.mixer.music.play(loops=-1)
                return
            clip = self.clips.get(sound)
            if clip is not None:
                clip.play()
        except pygame.error as exc:
            logger.debug("playback of %s failed: %s", sound.value, exc)
