import json
import logging
import pytest
from latex_omml.config import JUSTIFICATIONS, ConverterConfig, load_config


class TestConverterConfig:

    def test_defaults(self):
        """Test default option values."""
        config = ConverterConfig()
        assert not config.strict
        assert config.validate
        assert config.display_justification == 'center'
        assert config.nary_limits_stacked
        assert config.preserve_text_spacing

    @pytest.mark.parametrize("justification", JUSTIFICATIONS)
    def test_valid_justifications(self, justification):
        """Test every paragraph justification OMML allows."""
        assert ConverterConfig(display_justification=justification).display_justification == justification

    def test_invalid_justification(self):
        """Test an unsupported justification is rejected."""
        with pytest.raises(ValueError, match="display_justification"):
            ConverterConfig(display_justification='middle')

    def test_from_dict(self):
        """Test building a config from a mapping."""
        config = ConverterConfig.from_dict({'strict': True, 'nary_limits_stacked': False})
        assert config.strict
        assert not config.nary_limits_stacked
        assert config.validate

    def test_unknown_keys(self):
        """Test unknown keys are reported by name."""
        with pytest.raises(ValueError, match="colour, fontsize"):
            ConverterConfig.from_dict({'fontsize': 12, 'colour': 'red'})

    def test_to_dict(self):
        """Test the dict form lists every option."""
        data = ConverterConfig(strict=True).to_dict()
        assert data == {
            'strict': True,
            'validate': True,
            'display_justification': 'center',
            'nary_limits_stacked': True,
            'preserve_text_spacing': True,
        }
        assert ConverterConfig.from_dict(data) == ConverterConfig(strict=True)


class TestLoadConfig:

    def test_load_yaml(self, temp_dir):
        """Test loading options from YAML."""
        path = temp_dir / 'config.yaml'
        path.write_text("strict: true\ndisplay_justification: left\n", encoding='utf-8')
        config = load_config(path)
        assert config.strict
        assert config.display_justification == 'left'

    def test_load_yml_suffix(self, temp_dir):
        """Test the .yml suffix is read as YAML."""
        path = temp_dir / 'config.yml'
        path.write_text("validate: false\n", encoding='utf-8')
        assert not load_config(str(path)).validate

    def test_load_json(self, temp_dir):
        """Test loading options from JSON."""
        path = temp_dir / 'config.json'
        path.write_text(json.dumps({'preserve_text_spacing': False}), encoding='utf-8')
        assert not load_config(path).preserve_text_spacing

    def test_empty_yaml(self, temp_dir):
        """Test an empty file gives the defaults."""
        path = temp_dir / 'empty.yaml'
        path.write_text("", encoding='utf-8')
        assert load_config(path) == ConverterConfig()

    def test_missing_file(self, temp_dir):
        """Test a missing file is reported."""
        with pytest.raises(FileNotFoundError):
            load_config(temp_dir / 'missing.yaml')

    def test_non_mapping(self, temp_dir):
        """Test the file must hold a mapping."""
        path = temp_dir / 'list.yaml'
        path.write_text("- strict\n- validate\n", encoding='utf-8')
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_invalid_values_in_file(self, temp_dir):
        """Test file values go through the same checks."""
        path = temp_dir / 'bad.yaml'
        path.write_text("display_justification: middle\n", encoding='utf-8')
        with pytest.raises(ValueError):
            load_config(path)

    def test_load_logged(self, temp_dir, caplog):
        """Test loading is logged at info level."""
        path = temp_dir / 'config.yaml'
        path.write_text("strict: false\n", encoding='utf-8')
        with caplog.at_level(logging.INFO, logger='latex_omml.config'):
            load_config(path)
        assert any('Loaded converter configuration' in record.getMessage() for record in caplog.records)
