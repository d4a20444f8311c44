# tests/test_cli.py
import pytest

from csgtracer.core.color import Color
from csgtracer.imaging.hdr_image import HdrImage
from csgtracer.imaging.pfm import read_pfm_file, write_pfm_file
from csgtracer.main import build_parser, main

SMALL = ["--width", "4", "--height", "3"]

SCENE = """
material m(diffuse(uniform(<1, 1, 1>)), uniform(<0.5, 0.5, 0.5>))
fusion(sphere(m, identity), sphere(m, translation([0, 0, 0.5])), identity)
camera(orthogonal, translation([-2, 0, 0]), 1.0)
"""


class TestParser:
    def test_render_options(self):
        args = build_parser().parse_args(
            ["render", "scene.txt", "--var", "angle=30", "--var", "size=2", "--samples", "4"]
        )
        assert args.scene_file == "scene.txt"
        assert args.var == [("angle", 30.0), ("size", 2.0)]
        assert args.samples_per_pixel == 4
        assert args.renderer == "pathtracing"

    def test_demo_defaults(self):
        args = build_parser().parse_args(["demo"])
        assert args.renderer == "onoff"
        assert args.camera == "perspective"
        assert args.extension == ".png"

    @pytest.mark.parametrize("argv", [
        ["render", "scene.txt", "--var", "angle"],
        ["render", "scene.txt", "--var", "angle=abc"],
        ["demo", "--extension", "gif"],
        ["demo", "--renderer", "raymarching"],
        [],
    ])
    def test_rejected_arguments(self, argv):
        with pytest.raises(SystemExit):
            build_parser().parse_args(argv)


class TestMain:
    def test_demo(self, tmp_path):
        code = main(["-q", "demo", *SMALL, "--output-dir", str(tmp_path), "--output-name", "demo"])
        assert code == 0
        assert (tmp_path / "demo.pfm").exists()
        assert (tmp_path / "demo.png").exists()
        image = read_pfm_file(tmp_path / "demo.pfm")
        assert (image.width, image.height) == (4, 3)

    def test_render_scene(self, tmp_path):
        scene = tmp_path / "scene.txt"
        scene.write_text(SCENE)
        code = main(["-q", "render", str(scene), *SMALL, "--renderer", "flat",
                     "--output-dir", str(tmp_path), "--output-name", "out", "--extension", "jpg"])
        assert code == 0
        assert (tmp_path / "out.jpg").exists()
        image = read_pfm_file(tmp_path / "out.pfm")
        # The fused spheres fill the middle of the frame
        assert image.get_pixel(2, 2).is_close(Color(1.5, 1.5, 1.5))

    def test_render_without_camera(self, tmp_path):
        scene = tmp_path / "scene.txt"
        scene.write_text("material m(diffuse(uniform(<1, 1, 1>)), uniform(<0, 0, 0>))\n"
                         "sphere(m, identity)\n")
        code = main(["-q", "render", str(scene), *SMALL, "--renderer", "onoff",
                     "--output-dir", str(tmp_path), "--output-name", "out"])
        assert code == 0
        assert (tmp_path / "out.pfm").exists()

    def test_bad_scene(self, tmp_path):
        scene = tmp_path / "scene.txt"
        scene.write_text("sphere(missing, identity)")
        assert main(["-q", "render", str(scene), *SMALL, "--output-dir", str(tmp_path)]) == 1

    def test_missing_scene(self, tmp_path):
        assert main(["-q", "render", str(tmp_path / "nope.txt"), *SMALL]) == 1

    def test_bad_settings(self, tmp_path):
        assert main(["-q", "demo", *SMALL, "--samples", "3", "--output-dir", str(tmp_path)]) == 1

    def test_tonemap(self, tmp_path):
        image = HdrImage(width=2, height=2)
        image.set_pixel(1, 1, Color(10.0, 5.0, 1.0))
        image.set_pixel(2, 2, Color(1.0, 1.0, 1.0))
        pfm = tmp_path / "in.pfm"
        write_pfm_file(pfm, image)
        out = tmp_path / "out.png"
        code = main(["-q", "tonemap", str(pfm), str(out), "--factor", "0.5",
                     "--gamma", "2.2", "--mean-type", "arithmetic"])
        assert code == 0
        assert out.exists()

    def test_tonemap_bad_extension(self, tmp_path):
        image = HdrImage(width=1, height=1)
        pfm = tmp_path / "in.pfm"
        write_pfm_file(pfm, image)
        assert main(["-q", "tonemap", str(pfm), str(tmp_path / "out.gif")]) == 1
