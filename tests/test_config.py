import argparse
import logging

import pytest

from nutsprite.core import ConfigError, ConvertConfig, apply_args, load_config, save_config


def test_defaults():
    config = ConvertConfig()
    assert config.input_path == 'convert.gif'
    assert config.output_path == 'data.nut'
    assert config.max_colors == 64
    assert config.include_frame_count is True
    assert config.log_level_value == logging.WARNING


def test_load_yaml_ignores_unknown_keys(tmp_path):
    path = tmp_path / 'sprite.yaml'
    path.write_text(
        'input_path: torch.gif\n'
        'max_colors: 16\n'
        'include_frame_count: false\n'
        'dither: true\n'
    )
    config = load_config(path)
    assert config.input_path == 'torch.gif'
    assert config.output_path == 'data.nut'
    assert config.max_colors == 16
    assert config.include_frame_count is False


def test_saved_config_loads_back(tmp_path):
    path = save_config(ConvertConfig(output_path='out/torch.nut', max_colors=8), tmp_path / 'c.yaml')
    assert load_config(path) == ConvertConfig(output_path='out/torch.nut', max_colors=8)


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text('')
    assert load_config(path) == ConvertConfig()


@pytest.mark.parametrize('data', [
    {'max_colors': 65},
    {'max_colors': 0},
    {'max_colors': 'many'},
    {'max_colors': True},
    {'include_frame_count': 'yes'},
    {'log_level': 'LOUD'},
    {'output_path': ''},
])
def test_invalid_values(data):
    with pytest.raises(ConfigError):
        ConvertConfig.from_dict(data)


def test_bad_files(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / 'missing.yaml')

    broken = tmp_path / 'broken.yaml'
    broken.write_text('max_colors: [1, 2\n')
    with pytest.raises(ConfigError):
        load_config(broken)

    listing = tmp_path / 'list.yaml'
    listing.write_text('- 1\n- 2\n')
    with pytest.raises(ConfigError):
        load_config(listing)


def test_args_override_only_what_was_given():
    base = ConvertConfig(input_path='a.gif', output_path='a.nut', max_colors=32)
    args = argparse.Namespace(
        input=None, output='b.nut', max_colors=None, no_frame_count=True, verbose=True,
    )
    config = apply_args(base, args)
    assert config.input_path == 'a.gif'
    assert config.output_path == 'b.nut'
    assert config.max_colors == 32
    assert config.include_frame_count is False
    assert config.log_level == 'DEBUG'
