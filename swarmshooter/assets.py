"""Cache of textures, fonts, music and sound effects with reference counting."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Hashable, Optional

import pygame

from .graphics import GraphicsError


class AssetError(RuntimeError):
    """Raised when an asset cannot be loaded."""


class AssetManager:
    """Loads each asset once and tracks how many users hold it."""

    def __init__(self, graphics, base_path: Optional[os.PathLike] = None) -> None:
        self._graphics = graphics
        base = Path(base_path) if base_path is not None else Path.cwd()
        self._asset_dir = base / "Assets"
        self._audio_dir = self._asset_dir / "Audio"
        self._textures: Dict[Hashable, Any] = {}
        self._fonts: Dict[Hashable, pygame.font.Font] = {}
        self._music: Dict[str, Path] = {}
        self._sfx: Dict[str, Any] = {}
        self._refs: Dict[int, int] = {}

    # -- loading --------------------------------------------------------
    def get_texture(self, filename: str, managed: bool = True):
        """Return the texture for ``filename`` under the asset directory."""
        path = self._asset_dir / filename
        key = str(path)
        texture = self._textures.get(key)
        if texture is None:
            try:
                texture = self._graphics.load_texture(path)
            except GraphicsError as exc:
                raise AssetError(str(exc)) from exc
            self._textures[key] = texture
        if managed:
            self._retain(texture)
        return texture

    def get_text(self, text: str, filename: str, size: int, color, managed: bool = True):
        """Return a texture of ``text`` rendered with the named font."""
        rgb = pygame.Color(color)
        key = (text, filename, size, rgb.r, rgb.g, rgb.b)
        texture = self._textures.get(key)
        if texture is None:
            font = self.get_font(filename, size)
            try:
                texture = self._graphics.create_text_texture(font, text, rgb)
            except GraphicsError as exc:
                raise AssetError(str(exc)) from exc
            self._textures[key] = texture
        if managed:
            self._retain(texture)
        return texture

    def get_font(self, filename: str, size: int) -> pygame.font.Font:
        """Return the font ``filename`` at ``size`` points."""
        path = self._asset_dir / filename
        key = (str(path), size)
        font = self._fonts.get(key)
        if font is None:
            if not path.is_file():
                raise AssetError(f"Unable to load font {filename}: file not found")
            if not pygame.font.get_init():
                pygame.font.init()
            try:
                font = pygame.font.Font(str(path), size)
            except (pygame.error, OSError) as exc:
                raise AssetError(f"Unable to load font {filename}: {exc}") from exc
            self._fonts[key] = font
        return font

    def get_music(self, filename: str, managed: bool = True) -> Path:
        """Return the handle of the music file ``filename`` under the audio directory."""
        path = self._audio_dir / filename
        key = str(path)
        music = self._music.get(key)
        if music is None:
            if not path.is_file():
                raise AssetError(f"Unable to load music {filename}: file not found")
            music = path
            self._music[key] = music
        if managed:
            self._retain(music)
        return music

    def get_sfx(self, filename: str, managed: bool = True):
        """Return the sound effect ``filename`` under the audio directory."""
        path = self._audio_dir / filename
        key = str(path)
        sfx = self._sfx.get(key)
        if sfx is None:
            if not path.is_file():
                raise AssetError(f"Unable to load SFX {filename}: file not found")
            try:
                sfx = pygame.mixer.Sound(str(path))
            except (pygame.error, OSError) as exc:
                raise AssetError(f"Unable to load SFX {filename}: {exc}") from exc
            self._sfx[key] = sfx
        if managed:
            self._retain(sfx)
        return sfx

    # -- releasing ------------------------------------------------------
    def destroy_texture(self, texture) -> None:
        """Drop one reference to ``texture``, unloading it when none remain."""
        if self._release(texture):
            self._unload(self._textures, texture)

    def destroy_music(self, music) -> None:
        """Drop one reference to ``music``, unloading it when none remain."""
        if self._release(music):
            self._unload(self._music, music)

    def destroy_sfx(self, sfx) -> None:
        """Drop one reference to ``sfx``, unloading it when none remain."""
        if self._release(sfx):
            if self._unload(self._sfx, sfx):
                sfx.stop()

    def ref_count(self, asset) -> int:
        """Number of managed references held to ``asset``."""
        return self._refs.get(id(asset), 0)

    # -- helpers --------------------------------------------------------
    def _retain(self, asset) -> None:
        self._refs[id(asset)] = self._refs.get(id(asset), 0) + 1

    def _release(self, asset) -> bool:
        """Decrement the count; True when the asset should be unloaded."""
        key = id(asset)
        count = self._refs.get(key)
        if count is None:
            return True
        count -= 1
        if count <= 0:
            del self._refs[key]
            return True
        self._refs[key] = count
        return False

    @staticmethod
    def _unload(cache: Dict[Hashable, Any], asset) -> bool:
        key = next((k for k, v in cache.items() if v is asset), None)
        if key is None:
            return False
        del cache[key]
        return True