import unittest

import blockfall_board as board
import blockfall_piece as piece
from blockfall_errors import UnknownPieceKey


class TestCatalog(unittest.TestCase):
    def test_keys(self):
        self.assertEqual("OTSZLJI", piece.PIECE_KEYS)
        self.assertEqual(set("OTSZLJI"), set(piece.SHAPES))

    def test_geometry(self):
        self.assertEqual([[1, 1], [1, 1]], piece.lookup("O"))
        for key in "TSZLJ":
            shape = piece.lookup(key)
            self.assertEqual(3, len(shape))
            self.assertTrue(all(len(row) == 3 for row in shape))
            self.assertEqual([0, 0, 0], shape[2])
        i = piece.lookup("I")
        self.assertEqual(4, len(i))
        self.assertEqual([[0, 7, 0, 0]] * 4, i)

    def test_four_cells_with_piece_id(self):
        for key in piece.PIECE_KEYS:
            cells = [v for row in piece.lookup(key) for v in row if v]
            self.assertEqual(4, len(cells))
            self.assertEqual({piece.piece_id(key)}, set(cells))

    def test_every_shape_touches_top_row(self):
        for key in piece.PIECE_KEYS:
            self.assertTrue(any(piece.lookup(key)[0]), key)

    def test_lookup_returns_copy(self):
        s = piece.lookup("T")
        s[0][0] = 99
        self.assertEqual(0, piece.lookup("T")[0][0])

    def test_unknown_key(self):
        for key in ["X", "", "o", "OT", None]:
            with self.assertRaises(UnknownPieceKey):
                piece.lookup(key)
        self.assertTrue(issubclass(UnknownPieceKey, KeyError))


class TestRotate(unittest.TestCase):
    def test_clockwise(self):
        self.assertEqual([
            [0, 2, 0],
            [0, 2, 2],
            [0, 2, 0],
        ], piece.rotate(piece.lookup("T")))

    def test_does_not_mutate(self):
        s = piece.lookup("L")
        piece.rotate(s)
        self.assertEqual(piece.lookup("L"), s)

    def test_four_turns_round_trip(self):
        for key in piece.PIECE_KEYS:
            s = piece.lookup(key)
            r = s
            for _ in range(4):
                r = piece.rotate(r)
            self.assertEqual(s, r, key)

    def test_kick_offsets(self):
        self.assertEqual([1, -2, 3], list(piece.kick_offsets(3)))
        self.assertEqual([1, -2, 3, -4], list(piece.kick_offsets(4)))
        self.assertEqual([1, -2], list(piece.kick_offsets(2)))


class TestAttemptRotate(unittest.TestCase):
    def setUp(self):
        self.g = board.create(8, 20)

    def test_free_rotation_keeps_position(self):
        p = piece.ActivePiece.spawn("T", 8)
        p.y = 5
        r = piece.attempt_rotate(self.g, p)
        self.assertEqual(piece.rotate(p.shape), r.shape)
        self.assertEqual((p.x, p.y), (r.x, r.y))
        self.assertEqual(1, r.rotation)

    def test_kick_off_left_wall(self):
        p = piece.ActivePiece("I", piece.lookup("I"), -1, 5)
        self.assertFalse(board.collides(self.g, p.shape, p.x, p.y))
        r = piece.attempt_rotate(self.g, p)
        self.assertEqual(0, r.x)
        self.assertFalse(board.collides(self.g, r.shape, r.x, r.y))

    def test_kick_off_right_wall(self):
        # +1 still collides, -2 is the first free offset
        p = piece.ActivePiece("I", piece.lookup("I"), 6, 5)
        r = piece.attempt_rotate(self.g, p)
        self.assertEqual(4, r.x)
        self.assertEqual(5, r.y)

    def test_no_room_leaves_piece_unchanged(self):
        p = piece.ActivePiece("I", piece.lookup("I"), 2, 0)
        self.g[1] = [1] * 8
        self.g[1][3] = 0
        self.assertFalse(board.collides(self.g, p.shape, p.x, p.y))
        r = piece.attempt_rotate(self.g, p)
        self.assertIs(p, r)
        self.assertEqual(piece.lookup("I"), r.shape)
        self.assertEqual(2, r.x)

    def test_never_overlaps(self):
        self.g[10] = [1, 0, 1, 0, 1, 0, 1, 0]
        for key in piece.PIECE_KEYS:
            for x in range(-1, 8):
                for y in range(7, 10):
                    p = piece.ActivePiece(key, piece.lookup(key), x, y)
                    if board.collides(self.g, p.shape, x, y):
                        continue
                    r = piece.attempt_rotate(self.g, p)
                    self.assertFalse(board.collides(self.g, r.shape, r.x, r.y))


class TestSpawn(unittest.TestCase):
    def test_centered(self):
        self.assertEqual((3, 0), (piece.ActivePiece.spawn("O", 8).x, piece.ActivePiece.spawn("O", 8).y))
        self.assertEqual(2, piece.ActivePiece.spawn("I", 8).x)
        self.assertEqual(3, piece.ActivePiece.spawn("T", 10).x)
        self.assertEqual(2, piece.ActivePiece.spawn("S", 8).x)


if __name__ == '__main__':
    unittest.main()
