# tests/test_pcg.py
from csgtracer.core.pcg import PCG


class TestPCG:
    """Reference stream of PCG32 with the default seed."""

    def test_initial_state(self, pcg):
        assert pcg.state == 1753877967969059832
        assert pcg.inc == 109

    def test_sequence(self, pcg):
        expected = [2707161783, 2068313097, 3122475824, 2211639955, 3215226955, 3421331566]
        assert [pcg.random() for _ in expected] == expected

    def test_floats_in_unit_interval(self, pcg):
        values = [pcg.random_float() for _ in range(1000)]
        assert all(0.0 <= x < 1.0 for x in values)

    def test_same_seed_same_stream(self):
        a = PCG(init_state=7, init_seq=3)
        b = PCG(init_state=7, init_seq=3)
        c = PCG(init_state=7, init_seq=4)
        stream_a = [a.random() for _ in range(10)]
        assert stream_a == [b.random() for _ in range(10)]
        assert stream_a != [c.random() for _ in range(10)]
