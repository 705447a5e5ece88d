"""Tests for the GridWorld module."""

import numpy as np
import pytest

from snake_core.grid import CellTag, GridWorld, InvalidDimensions


class TestGridInit:
    def test_custom_dimensions(self):
        world = GridWorld(width=10, height=8)
        assert world.size() == (10, 8)
        assert world.cells.shape == (8, 10)

    def test_all_cells_start_empty(self):
        world = GridWorld(5, 5)
        assert np.all(world.cells == CellTag.EMPTY)

    def test_one_by_one_is_valid(self):
        assert GridWorld(1, 1).size() == (1, 1)

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 5), (5, -3)])
    def test_non_positive_dimensions_rejected(self, width, height):
        with pytest.raises(InvalidDimensions, match="positive"):
            GridWorld(width, height)

    def test_non_integer_dimensions_rejected(self):
        with pytest.raises(InvalidDimensions):
            GridWorld(2.5, 4)

    def test_invalid_dimensions_is_value_error(self):
        with pytest.raises(ValueError):
            GridWorld(0, 0)


class TestGridOperations:
    def test_set_and_get(self):
        world = GridWorld(5, 4)
        world.set_cell(3, 1, CellTag.FOOD)
        assert world.get_cell(3, 1) == CellTag.FOOD
        assert world.cells[1, 3] == CellTag.FOOD

    def test_set_out_of_bounds_is_noop(self):
        world = GridWorld(5, 5)
        world.set_cell(-1, 0, CellTag.SNAKE_HEAD)
        world.set_cell(0, 5, CellTag.SNAKE_HEAD)
        world.set_cell(5, 0, CellTag.SNAKE_HEAD)
        assert np.all(world.cells == CellTag.EMPTY)

    def test_get_out_of_bounds_raises(self):
        world = GridWorld(5, 5)
        with pytest.raises(IndexError):
            world.get_cell(5, 0)

    def test_clear(self):
        world = GridWorld(5, 5)
        world.set_cell(0, 0, CellTag.SNAKE_HEAD)
        world.set_cell(1, 1, CellTag.FOOD)
        world.clear()
        assert np.all(world.cells == CellTag.EMPTY)

    def test_in_bounds(self):
        world = GridWorld(6, 4)
        assert world.in_bounds(0, 0)
        assert world.in_bounds(5, 3)
        assert not world.in_bounds(-1, 0)
        assert not world.in_bounds(0, -1)
        assert not world.in_bounds(6, 0)
        assert not world.in_bounds(0, 4)

    def test_cells_of(self):
        world = GridWorld(4, 4)
        world.set_cell(2, 1, CellTag.SNAKE_BODY)
        world.set_cell(0, 3, CellTag.SNAKE_BODY)
        assert sorted(world.cells_of(CellTag.SNAKE_BODY)) == [(0, 3), (2, 1)]
        assert len(world.cells_of(CellTag.EMPTY)) == 14


class TestGridSerialization:
    def test_to_dict_structure(self):
        world = GridWorld(5, 3)
        d = world.to_dict()
        assert d["width"] == 5
        assert d["height"] == 3
        assert len(d["cells"]) == 3
        assert len(d["cells"][0]) == 5

    def test_to_dict_reflects_state(self):
        world = GridWorld(4, 4)
        world.set_cell(1, 2, CellTag.FOOD)
        assert world.to_dict()["cells"][2][1] == CellTag.FOOD
