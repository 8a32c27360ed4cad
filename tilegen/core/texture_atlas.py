"""
Tilegen - Texture Atlas

Procedurally generated texture atlas stored as bit-packed words.

The atlas is a square grid of atlas_size x atlas_size textures, each
tex_size x tex_size texels. Texels are addressed row-major across the whole
atlas and packed texel_bits at a time into 32-bit little-endian words, so the
word buffer can be handed to a renderer as a raw single-channel image.
"""

import random
import zlib
from dataclasses import dataclass
from numbers import Integral

import numpy as np

from .bit_packing import (
    WORD_MASK,
    WORD_WIDTH,
    is_power_of_two,
    read_bits,
    texel_location,
    write_bits,
)

WORD_DTYPE = np.dtype("<u4")


class AtlasConfigError(ValueError):
    """Raised when an atlas is configured with unusable dimensions or depth."""


@dataclass(frozen=True)
class AtlasConfig:
    """Immutable atlas dimensions."""

    atlas_size: int  # Textures per side
    tex_size: int  # Texels per side of one texture
    texel_bits: int  # Bits per texel

    def __post_init__(self):
        for name in ("atlas_size", "tex_size", "texel_bits"):
            value = getattr(self, name)
            if not isinstance(value, Integral) or isinstance(value, bool):
                raise AtlasConfigError(f"{name} must be an integer, got {value!r}")
        if self.atlas_size <= 0:
            raise AtlasConfigError(f"atlas_size must be positive, got {self.atlas_size}")
        if self.tex_size <= 0:
            raise AtlasConfigError(f"tex_size must be positive, got {self.tex_size}")
        if not is_power_of_two(self.texel_bits):
            raise AtlasConfigError(
                f"texel_bits must be a power of two, got {self.texel_bits}"
            )
        if self.texel_bits > WORD_WIDTH:
            raise AtlasConfigError(
                f"texel_bits must be at most {WORD_WIDTH}, got {self.texel_bits}"
            )

    @property
    def side_texels(self) -> int:
        return self.atlas_size * self.tex_size

    @property
    def total_texels(self) -> int:
        return self.side_texels * self.side_texels

    @property
    def texels_per_word(self) -> int:
        return WORD_WIDTH // self.texel_bits

    @property
    def word_count(self) -> int:
        total_bits = self.total_texels * self.texel_bits
        return (total_bits + WORD_WIDTH - 1) // WORD_WIDTH

    @property
    def byte_count(self) -> int:
        return self.word_count * WORD_WIDTH // 8

    @property
    def max_texel_value(self) -> int:
        return (1 << self.texel_bits) - 1


class TextureAtlas:
    """
    Square atlas of square textures, bit-packed into 32-bit words.

    Usage:
        atlas = TextureAtlas.create(atlas_size=2, tex_size=8, texel_bits=2)
        atlas.generate_tile(1, 0, rng=random.Random(42))
        upload(atlas.byte_view())
    """

    def __init__(self, config: AtlasConfig, rng: random.Random | None = None):
        """
        Allocate a zero-filled atlas.

        Args:
            config: Atlas dimensions and texel depth
            rng: Default random source for generate_tile (unseeded if omitted)
        """
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.words = np.zeros(config.word_count, dtype=WORD_DTYPE)
        self.modified: bool = False

    @classmethod
    def create(
        cls,
        atlas_size: int,
        tex_size: int,
        texel_bits: int,
        rng: random.Random | None = None,
    ) -> "TextureAtlas":
        """Build an atlas straight from its dimensions."""
        return cls(AtlasConfig(atlas_size, tex_size, texel_bits), rng=rng)

    @property
    def atlas_size(self) -> int:
        return self.config.atlas_size

    @property
    def tex_size(self) -> int:
        return self.config.tex_size

    @property
    def texel_bits(self) -> int:
        return self.config.texel_bits

    # Texel addressing

    def _check_tile(self, tx: int, ty: int):
        size = self.config.atlas_size
        if not (0 <= tx < size and 0 <= ty < size):
            raise IndexError(f"Tile ({tx}, {ty}) outside {size}x{size} atlas")

    def _check_texel(self, gx: int, gy: int):
        side = self.config.side_texels
        if not (0 <= gx < side and 0 <= gy < side):
            raise IndexError(f"Texel ({gx}, {gy}) outside {side}x{side} atlas")

    def _tile_to_global(self, tx: int, ty: int, x: int, y: int) -> tuple[int, int]:
        self._check_tile(tx, ty)
        size = self.config.tex_size
        if not (0 <= x < size and 0 <= y < size):
            raise IndexError(f"Texel ({x}, {y}) outside {size}x{size} texture")
        return tx * size + x, ty * size + y

    def get_texel(self, gx: int, gy: int) -> int:
        """Read the texel at atlas-global coordinates."""
        self._check_texel(gx, gy)
        word_idx, offset = texel_location(gy * self.config.side_texels + gx, self.texel_bits)
        return read_bits(int(self.words[word_idx]), offset, self.texel_bits)

    def set_texel(self, gx: int, gy: int, value: int):
        """Write the low texel_bits bits of value at atlas-global coordinates."""
        self._check_texel(gx, gy)
        self._write(gy * self.config.side_texels + gx, value)
        self.modified = True

    def get_tile_texel(self, tx: int, ty: int, x: int, y: int) -> int:
        """Read texel (x, y) of texture (tx, ty)."""
        return self.get_texel(*self._tile_to_global(tx, ty, x, y))

    def set_tile_texel(self, tx: int, ty: int, x: int, y: int, value: int):
        """Write texel (x, y) of texture (tx, ty)."""
        self.set_texel(*self._tile_to_global(tx, ty, x, y), value)

    def _write(self, index: int, value: int):
        word_idx, offset = texel_location(index, self.texel_bits)
        self.words[word_idx] = write_bits(int(self.words[word_idx]), offset, self.texel_bits, value)

    # Generation

    def generate_tile(self, tx: int, ty: int, rng: random.Random | None = None):
        """
        Fill texture (tx, ty) with fresh random texels.

        Only texels inside the texture's square are rewritten; neighbouring
        textures sharing the same words keep their bits.

        Args:
            tx: Texture column in the atlas
            ty: Texture row in the atlas
            rng: Random source (defaults to the atlas's own)

        Raises:
            IndexError: If (tx, ty) is outside the atlas
        """
        self._check_tile(tx, ty)
        rng = rng if rng is not None else self.rng

        size = self.config.tex_size
        side = self.config.side_texels
        base_x = tx * size
        base_y = ty * size

        for gy in range(base_y, base_y + size):
            row_start = gy * side + base_x
            for index in range(row_start, row_start + size):
                self._write(index, rng.getrandbits(self.texel_bits))

        self.modified = True

    # Export

    def get_tile_texels(self, tx: int, ty: int) -> list[list[int]]:
        """
        Unpack one texture.

        Returns:
            tex_size x tex_size array of texel values, indexed [y][x]
        """
        self._check_tile(tx, ty)
        size = self.config.tex_size
        return [
            [self.get_texel(tx * size + x, ty * size + y) for x in range(size)]
            for y in range(size)
        ]

    def to_texel_array(self) -> np.ndarray:
        """
        Unpack the whole atlas.

        Returns:
            side_texels x side_texels uint32 array indexed [y, x]
        """
        bits = self.texel_bits
        per_word = self.config.texels_per_word
        side = self.config.side_texels

        # Expand every word into its texels, lowest bits first
        shifts = np.arange(per_word, dtype=np.uint64) * bits
        mask = np.uint64(self.config.max_texel_value)
        expanded = (self.words.astype(np.uint64)[:, None] >> shifts) & mask
        flat = expanded.reshape(-1)[: self.config.total_texels]
        return flat.astype(np.uint32).reshape(side, side)

    def tile_checksum(self, tx: int, ty: int) -> int:
        """CRC32 over the texel values of texture (tx, ty)."""
        texels = np.asarray(self.get_tile_texels(tx, ty), dtype=WORD_DTYPE)
        return zlib.crc32(texels.tobytes())

    def as_bytes(self) -> bytes:
        """Copy of the packed storage, byte_count bytes long."""
        return self.words.tobytes()

    def byte_view(self) -> np.ndarray:
        """
        Read-only byte view sharing memory with the word buffer.

        Interpreted by the renderer as a side_texels x side_texels image at
        texel_bits bits per texel.
        """
        view = self.words.view(np.uint8)
        view.flags.writeable = False
        return view

    def load_words(self, words):
        """
        Replace the packed storage.

        Args:
            words: Sequence of word values, exactly word_count long

        Raises:
            ValueError: If the length does not match the configuration or a
                value does not fit in a word
        """
        if len(words) != self.config.word_count:
            raise ValueError(
                f"Expected {self.config.word_count} words, got {len(words)}"
            )
        for value in words:
            if not 0 <= value <= WORD_MASK:
                raise ValueError(f"Word value {value!r} does not fit in {WORD_WIDTH} bits")
        self.words = np.asarray(words, dtype=WORD_DTYPE).copy()
        self.modified = True

    def mark_clean(self):
        """Clear the modified flag after the renderer has consumed the buffer."""
        self.modified = False
