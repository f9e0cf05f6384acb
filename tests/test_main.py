"""Tests for the command-line entry point."""

import pytest
from PIL import Image

from cornellroom.options import MirrorWall, SecondLightPlacement
from main import build_parser, options_from_args, main


def parse(*argv):
    return options_from_args(build_parser().parse_args(list(argv)))


class TestOptionsFromArgs:
    """Test merging config files and flags."""

    def test_defaults(self):
        options = parse()
        assert options.width == 1024
        assert options.height == 768
        assert options.mirror_wall is MirrorWall.NONE
        assert not options.mirror_spheres

    def test_flags(self):
        options = parse(
            '--width', '320', '--height', '200', '--samples', '4', '--depth', '6',
            '--mirror-cubes', '--transparent-spheres',
            '--mirror-wall', 'floor', '--second-light', 'left'
        )
        assert options.width == 320
        assert options.height == 200
        assert options.samples_per_pixel == 4
        assert options.max_depth == 6
        assert options.mirror_cubes
        assert options.transparent_spheres
        assert not options.mirror_spheres
        assert options.mirror_wall is MirrorWall.FLOOR
        assert options.second_light is SecondLightPlacement.LEFT

    def test_flags_override_config(self, tmp_path):
        config = tmp_path / "room.yaml"
        config.write_text("width: 300\nheight: 150\nmirror_spheres: true\nmirror_wall: back\n")

        options = parse('--config', str(config), '--width', '100')
        assert options.width == 100
        assert options.height == 150
        assert options.mirror_spheres
        assert options.mirror_wall is MirrorWall.BACK

    def test_invalid_choice_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['--mirror-wall', 'window'])


class TestMain:
    """Test running the full command."""

    def test_render_to_file(self, tmp_path, capsys):
        output = tmp_path / "out" / "room.png"
        code = main([
            '--width', '12', '--height', '8', '--threads', '1',
            '--second-light', 'floor', '--output', str(output)
        ])

        assert code == 0
        assert output.exists()
        assert Image.open(output).size == (12, 8)
        assert "Done!" in capsys.readouterr().out

    def test_bad_size_fails(self, tmp_path, capsys):
        code = main(['--width', '0', '--output', str(tmp_path / "x.png")])
        assert code == 1
        assert "Error" in capsys.readouterr().err
        assert not (tmp_path / "x.png").exists()

    def test_missing_config_fails(self, tmp_path):
        assert main(['--config', str(tmp_path / "nope.yaml")]) == 1
