import numpy as np
import pytest

from cg2d.delaunay import DelaunayResult, triangulate
from cg2d.geom import Pt, InvalidGeometry, dot, sub
from cg2d.polygon import Polygon
from cg2d.predicates import circumcenter, orient2d
from cg2d.voronoi import clipped_cells, clipped_cells_indexed, voronoi

BOX = [(-10, -10), (110, -10), (110, 110), (-10, 110)]


def _random_points(seed: int, n: int):
    rng = np.random.default_rng(seed)
    return [tuple(p) for p in (rng.random((n, 2)) * 100).tolist()]


class TestDiagram:
    """Dual construction from the triangulation."""

    def test_triangle_sites(self):
        vd = voronoi([(0, 0), (6, 0), (2, 4)])
        assert vd.vertices == (Pt(3, 1),)
        assert len(vd.bounded_edges) == 0
        assert len(vd.rays) == 3
        assert len(vd.cells) == 3
        for cell in vd.cells:
            assert not cell.bounded
            assert cell.vertex_indices == (0,)
            assert len(cell.edge_indices) == 2

    def test_quadrilateral(self):
        vd = voronoi([(0, 0), (4, 0), (5, 3), (0, 2)])
        assert len(vd.vertices) == 2
        assert len(vd.bounded_edges) == 1
        assert len(vd.rays) == 4

    def test_rays_point_outward(self):
        vd = voronoi(_random_points(1, 30))
        dt = vd.delaunay
        for e in vd.rays:
            assert e.direction != Pt(0, 0)
            assert e.tgt is None and e.vertex_v is None
            a, b = dt.sites[e.site_u], dt.sites[e.site_v]
            tri = dt.triangles[e.vertex_u]
            (third,) = [i for i in tri if i not in (e.site_u, e.site_v)]
            assert dot(e.direction, sub(dt.sites[third], a)) < 0
            assert dot(e.direction, sub(b, a)) == 0

    def test_bounded_edges_join_adjacent_circumcenters(self):
        vd = voronoi(_random_points(2, 40))
        dt = vd.delaunay
        assert len(vd.vertices) == len(dt.triangles)
        for e in vd.bounded_edges:
            t1, t2 = dt.triangles[e.vertex_u], dt.triangles[e.vertex_v]
            shared = set(t1) & set(t2)
            assert shared == {e.site_u, e.site_v}
            assert e.src == circumcenter(*dt.points(t1))
            assert e.tgt == circumcenter(*dt.points(t2))

    def test_cells_are_ccw_and_bounded_inside(self):
        vd = voronoi(_random_points(3, 50))
        hull_sites = {u for u, _ in vd.delaunay.hull_edges()}
        for cell in vd.cells:
            assert cell.bounded == (cell.site_index not in hull_sites)
            v = cell.vertices
            steps = len(v) if cell.bounded else len(v) - 1
            for i in range(steps):
                assert orient2d(cell.site, v[i], v[(i + 1) % len(v)]) > 0
            for i in cell.edge_indices:
                assert cell.site_index in (vd.edges[i].site_u, vd.edges[i].site_v)

    def test_accepts_triangulation(self):
        dt = triangulate([(0, 0), (4, 0), (0, 4), (4, 4), (2, 1)])
        vd = voronoi(dt)
        assert vd.delaunay is dt
        assert vd.sites == dt.sites

    def test_collinear_sites_have_empty_cells(self):
        vd = voronoi([(0, 0), (1, 0), (2, 0)])
        assert vd.vertices == () and vd.edges == ()
        assert all(not c.bounded and c.vertices == () for c in vd.cells)


class TestClipping:
    """Cells cut down to a convex region."""

    @pytest.mark.parametrize("cw", [False, True])
    def test_cells_tile_the_box(self, cw):
        box = Polygon.from_points(BOX[::-1] if cw else BOX)
        vd = voronoi(_random_points(4, 40))
        cells = clipped_cells(vd, box)
        assert len(cells) == len(vd.sites)
        for site, poly in zip(vd.sites, cells):
            assert poly.is_closed()
            assert poly.signed_area2() > 0
            assert poly.strictly_contains(site)
        assert sum(p.area() for p in cells) == box.area()

    def test_without_triangles_uses_all_sites(self):
        box = Polygon.from_points([(0, 0), (6, 0), (6, 2), (0, 2)])
        cells = clipped_cells(voronoi([(1, 1), (3, 1), (5, 1)]), box)
        assert [p.area() for p in cells] == [4, 4, 4]

    def test_site_outside_clip_gets_empty_polygon(self):
        box = Polygon.from_points([(0, 0), (4, 0), (4, 4), (0, 4)])
        cells = clipped_cells(voronoi([(1, 1), (3, 1), (2, 3), (9, 9)]), box)
        assert cells[-1].size() == 0 and cells[-1].is_closed()
        assert all(c.size() >= 3 for c in cells[:-1])

    def test_indexed(self):
        vd = voronoi(_random_points(5, 10))
        out = clipped_cells_indexed(vd, Polygon.from_points(BOX))
        assert [c.site_index for c in out] == list(range(len(vd.sites)))
        assert all(c.site == vd.sites[c.site_index] for c in out)

    def test_adjacency_built_once(self, monkeypatch):
        vd = voronoi(_random_points(6, 30))
        calls = []
        original = DelaunayResult.adjacency

        def counting(self):
            calls.append(1)
            return original(self)

        monkeypatch.setattr(DelaunayResult, "adjacency", counting)
        monkeypatch.setattr(DelaunayResult, "neighbors", lambda self, i: pytest.fail("per-site scan"))
        clipped_cells(vd, Polygon.from_points(BOX))
        assert len(calls) == 1

    def test_non_convex_clip_rejected(self):
        arrow = Polygon.from_points([(0, 0), (4, 0), (4, 4), (2, 1), (0, 4)])
        with pytest.raises(InvalidGeometry):
            clipped_cells(voronoi([(1, 1), (3, 1), (2, 3)]), arrow)

    def test_open_clip_rejected(self):
        with pytest.raises(InvalidGeometry):
            clipped_cells(voronoi([(1, 1), (3, 1), (2, 3)]), Polygon(BOX))
