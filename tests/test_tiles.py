"""
Tests for tile selection and the tile sprites.
"""
import pygame
import pytest

from components import Cell, CellType
from tiles import Tile, TileSet, get_number_tile, get_tile


def make_cell(type=CellType.EMPTY, number=0, revealed=False, flagged=False, exploded=False) -> Cell:
    cell = Cell(0, 0, type)
    cell.state.number = number
    cell.state.is_revealed = revealed
    cell.state.is_flagged = flagged
    cell.state.is_exploded = exploded
    return cell


class TestGetTile:
    def test_hidden_cell_is_unknown(self):
        assert get_tile(make_cell(CellType.MINE)) is Tile.UNKNOWN

    def test_flagged_cell_is_flag(self):
        assert get_tile(make_cell(CellType.NUMBER, number=2, flagged=True)) is Tile.FLAG

    def test_revealed_empty(self):
        assert get_tile(make_cell(revealed=True)) is Tile.EMPTY

    def test_revealed_mine(self):
        assert get_tile(make_cell(CellType.MINE, revealed=True)) is Tile.MINE

    def test_exploded_mine(self):
        assert get_tile(make_cell(CellType.MINE, revealed=True, exploded=True)) is Tile.EXPLODED

    @pytest.mark.parametrize("number", range(1, 9))
    def test_numbers(self, number):
        tile = get_tile(make_cell(CellType.NUMBER, number=number, revealed=True))
        assert tile.value == f"num{number}"

    @pytest.mark.parametrize("number", [0, 9, -1])
    def test_out_of_range_number_raises(self, number):
        with pytest.raises(ValueError, match="number"):
            get_number_tile(make_cell(CellType.NUMBER, number=number, revealed=True))

    def test_revealed_invalid_cell_raises(self):
        with pytest.raises(ValueError, match="INVALID"):
            get_tile(make_cell(CellType.INVALID, revealed=True))


class TestTileSet:
    def test_every_tile_has_a_cell_sized_surface(self, pygame_ready):
        tiles = TileSet(20)
        for tile in Tile:
            assert tiles[tile].get_size() == (20, 20)

    def test_images_override_drawn_tiles(self, pygame_ready, tmp_path):
        image = pygame.Surface((8, 8))
        image.fill((1, 2, 3))
        pygame.image.save(image, str(tmp_path / "flag.png"))

        tiles = TileSet(16, str(tmp_path))
        assert tiles[Tile.FLAG].get_size() == (16, 16)
        assert tuple(tiles[Tile.FLAG].get_at((8, 8)))[:3] == (1, 2, 3)
        # no image for the mine, so it is drawn
        assert tuple(tiles[Tile.MINE].get_at((1, 1)))[:3] != (1, 2, 3)
