"""
Tests for the generator configuration.
"""

import pytest

from xsd_to_code.pipeline.config import CodeGeneratorConfig, OutputConfig


def test_defaults():
    config = CodeGeneratorConfig()
    assert config.target_namespace == "Generated"
    assert not config.recurse
    assert not config.clean_output
    assert config.add_generation_comment
    assert config.output == OutputConfig(atomic_write=True, file_extension="cs")


def test_from_dict():
    config = CodeGeneratorConfig.from_dict(
        {
            "target_namespace": "Acme",
            "clean_output": True,
            "csharp_additional_usings": ["System.Linq"],
            "output": {"atomic_write": False},
            "unknown_option": 42,
        }
    )
    assert config.target_namespace == "Acme"
    assert config.clean_output
    assert config.csharp_additional_usings == ["System.Linq"]
    assert config.output == OutputConfig(atomic_write=False, file_extension="cs")
    assert not hasattr(config, "unknown_option")


def test_to_dict_is_accepted_by_from_dict():
    config = CodeGeneratorConfig(target_namespace="Acme", nullable=True)
    assert CodeGeneratorConfig.from_dict(config.to_dict()) == config


if __name__ == "__main__":
    pytest.main([__file__])
