"""Tests for domain sampling and surface mesh building."""

import math

import numpy as np
import pytest

from grapho_surface.config import InvalidConfigurationError
from grapho_surface.core.data_model import DomainRectangle
from grapho_surface.core.sampler import DomainSampler
from grapho_surface.core.mesh import build_surface_mesh, grid_faces


@pytest.fixture
def domain():
    return DomainRectangle(-2.0, 6.0, 10.0, 14.0)


class TestDomainSampler:

    def test_map_corners(self, domain):
        sampler = DomainSampler(lambda x, y: 0.0, domain)
        assert sampler.map(0, 0) == (-2.0, 10.0)
        assert sampler.map(1, 1) == (6.0, 14.0)
        assert sampler.map(0.5, 0.25) == (2.0, 11.0)

    def test_sample_evaluates_function(self, domain):
        sampler = DomainSampler(lambda x, y: x * y, domain)
        assert sampler.sample(1, 0) == (6.0, 10.0, 60.0)
        assert sampler.undefined_count == 0

    def test_nan_result_is_undefined(self, domain):
        sampler = DomainSampler(lambda x, y: math.nan, domain)
        x, y, z = sampler.sample(0.5, 0.5)
        assert (x, y) == (2.0, 12.0)
        assert math.isnan(z)
        assert sampler.undefined_count == 1

    def test_exception_is_undefined(self, domain):
        def failing(x, y):
            raise ZeroDivisionError("boom")

        sampler = DomainSampler(failing, domain)
        assert math.isnan(sampler.sample(0, 0)[2])
        assert sampler.undefined_count == 1

    def test_non_numeric_result_is_undefined(self, domain):
        sampler = DomainSampler(lambda x, y: None, domain)
        assert math.isnan(sampler.sample(0, 0)[2])

    def test_infinite_result_is_kept(self, domain):
        sampler = DomainSampler(lambda x, y: math.inf, domain)
        assert sampler.sample(0, 0)[2] == math.inf
        assert sampler.undefined_count == 0


class TestGridFaces:

    def test_face_count(self):
        assert grid_faces(1).shape == (2, 3)
        assert grid_faces(5).shape == (50, 3)

    def test_first_cell_winding(self):
        # 3 x 3 vertices: a=0, b=3, c=4, d=1
        faces = grid_faces(2)
        assert faces[0].tolist() == [0, 3, 1]
        assert faces[1].tolist() == [3, 4, 1]

    def test_every_vertex_is_used(self):
        faces = grid_faces(4)
        assert set(faces.ravel().tolist()) == set(range(25))

    def test_faces_stay_within_one_cell(self):
        stride = 7
        faces = grid_faces(stride - 1)
        columns = faces % stride
        rows = faces // stride
        assert (columns.max(axis=1) - columns.min(axis=1) == 1).all()
        assert (rows.max(axis=1) - rows.min(axis=1) == 1).all()


class TestBuildSurfaceMesh:

    @pytest.mark.parametrize('segments', [1, 3, 10])
    def test_counts(self, domain, segments):
        mesh = build_surface_mesh(lambda x, y: x + y, domain, segments)
        assert mesh.vertex_count == (segments + 1) ** 2
        assert mesh.face_count == 2 * segments ** 2
        assert mesh.segments == segments

    def test_positions_follow_domain_mapping(self, domain):
        segments = 8
        mesh = build_surface_mesh(lambda x, y: x - y, domain, segments)
        sampler = DomainSampler(lambda x, y: x - y, domain)
        for j in range(segments + 1):
            for i in range(segments + 1):
                index = mesh.vertex_index(i, j)
                x, y = sampler.map(i / segments, j / segments)
                assert mesh.positions[index, 0] == pytest.approx(x)
                assert mesh.positions[index, 1] == pytest.approx(y)
                assert mesh.positions[index, 2] == pytest.approx(x - y)
                assert tuple(mesh.uvs[index]) == pytest.approx((i / segments, j / segments))

    def test_undefined_samples_are_marked(self, domain):
        mesh = build_surface_mesh(lambda x, y: math.sqrt(x), domain, 4)
        # x = -2 is the only negative column
        assert mesh.undefined_count == 5
        first_column = [mesh.vertex_index(0, j) for j in range(5)]
        assert not mesh.defined[first_column].any()
        assert np.isnan(mesh.positions[first_column, 2]).all()
        assert mesh.positions[first_column, 0] == pytest.approx([-2.0] * 5)

    def test_undefined_samples_are_logged(self, domain, caplog):
        build_surface_mesh(lambda x, y: math.nan, domain, 2)
        assert "9 of 9 samples are undefined" in caplog.text

    @pytest.mark.parametrize('segments', [0, -3, 1.5])
    def test_invalid_segments_rejected_before_sampling(self, domain, segments):
        calls = []
        with pytest.raises(InvalidConfigurationError):
            build_surface_mesh(lambda x, y: calls.append((x, y)) or 0.0, domain, segments)
        assert calls == []

    def test_empty_domain_rejected_before_sampling(self):
        calls = []
        with pytest.raises(InvalidConfigurationError):
            build_surface_mesh(lambda x, y: calls.append((x, y)) or 0.0,
                               DomainRectangle(1.0, 1.0, 0.0, 1.0), 4)
        assert calls == []

    def test_dataframe(self, domain):
        mesh = build_surface_mesh(lambda x, y: 1.0, domain, 2)
        df = mesh.to_dataframe()
        assert len(df) == 9
        assert list(df.columns) == ['x', 'y', 'z', 'u', 'v', 'defined']
        assert df['defined'].all()
