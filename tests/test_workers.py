import numpy as np

from triadpicker.controller.picker import PickerSession
from triadpicker.controller.workers import VertexLocatorWorker
from triadpicker.model.geometry_primitives import Point2D


def test_worker_emits_located_triangle(triangle_rgba):
    rgba, w, h = triangle_rgba
    results, errors = [], []
    worker = VertexLocatorWorker(rgba, w, h)
    worker.located.connect(lambda t: results.append(t))
    worker.error_occurred.connect(lambda msg: errors.append(msg))

    worker.run()

    assert errors == []
    assert results[0].top == Point2D(50, 0)


def test_worker_result_can_be_adopted_by_session(triangle_rgba):
    rgba, w, h = triangle_rgba
    session = PickerSession()
    worker = VertexLocatorWorker(rgba, w, h, session.config.locator)
    worker.located.connect(session.set_image_triangle)

    worker.run()

    assert session.triangle is not None
    assert session.update_from_point(session.triangle.centroid) is not None


def test_worker_reports_errors():
    errors = []
    worker = VertexLocatorWorker(np.zeros((5, 5, 4), dtype=np.uint8), 10, 10)
    worker.error_occurred.connect(lambda msg: errors.append(msg))

    worker.run()

    assert len(errors) == 1
    assert "shape" in errors[0]
