from conicexplorer.model.coefficients import Coefficients
from conicexplorer.model.report import build_report
from conicexplorer.view.panels.analysis_panel import KIND_STYLE, NO_POINTS_STYLE, AnalysisPanel


def test_curve_kind_is_greyed_out_without_real_points(qapp):
    panel = AnalysisPanel()

    panel.update_report(build_report(Coefficients(1, 0, 1, 0, 0, -1)))
    assert panel.lbl_kind.text() == "Circle"
    assert panel.lbl_kind.styleSheet() == KIND_STYLE

    panel.update_report(build_report(Coefficients(1, 0, 1, 0, 0, 1)))
    assert panel.lbl_kind.text() == "Imaginary ellipse"
    assert panel.lbl_kind.styleSheet() == NO_POINTS_STYLE


def test_undefined_translation_is_shown(qapp):
    panel = AnalysisPanel()
    panel.update_report(build_report(Coefficients(0, 0, 1e308, 1e308, 1e308, 0)))

    assert panel.lbl_translation.text() == "Undefined"
    assert panel.lbl_translation_title.text() == "T (Vertex) ="
