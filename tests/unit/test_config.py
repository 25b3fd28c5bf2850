"""
Runtime Configuration Unit Tests
Tests for hashtree/config/runtime.py
"""
import pytest

from hashtree.config.runtime import TreeConfig, get_default_config, set_default_config
from hashtree.crypto.hashing import get_hash_function, sha256
from hashtree.schemas.errors import ConfigException, UnsupportedHashAlgorithmException


class TestTreeConfigDefaults:
    """Tests for default values."""
    
    def test_defaults(self):
        config = TreeConfig()
        
        assert config.hash_algorithm == "sha256"
        assert config.render_preview_bytes == 8
    
    def test_default_hash_function(self):
        assert TreeConfig().hash_function() is sha256
    
    def test_unknown_algorithm_surfaces_on_resolve(self):
        config = TreeConfig(hash_algorithm="nope")
        
        with pytest.raises(UnsupportedHashAlgorithmException):
            config.hash_function()
    
    def test_invalid_preview_bytes(self):
        with pytest.raises(ConfigException):
            TreeConfig(render_preview_bytes=0)


class TestTreeConfigLoading:
    """Tests for dict, env and YAML loading."""
    
    def test_from_dict_partial(self):
        config = TreeConfig.from_dict({"hash_algorithm": "sha512"})
        
        assert config.hash_algorithm == "sha512"
        assert config.render_preview_bytes == 8
    
    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigException, match="Unknown configuration keys"):
            TreeConfig.from_dict({"hash": "sha512"})
    
    def test_only_used_keys_accepted(self):
        """Configuration carries only the settings the library reads."""
        assert set(TreeConfig().to_dict()) == {"hash_algorithm", "render_preview_bytes"}
        
        with pytest.raises(ConfigException):
            TreeConfig.from_dict({"extra": {}})
    
    def test_to_dict_round_trip(self):
        config = TreeConfig(hash_algorithm="blake2b", render_preview_bytes=4)
        
        assert TreeConfig.from_dict(config.to_dict()) == config
    
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HASHTREE_HASH_ALGORITHM", "sha3_256")
        monkeypatch.setenv("HASHTREE_RENDER_PREVIEW_BYTES", "12")
        
        config = TreeConfig.from_env()
        
        assert config.hash_algorithm == "sha3_256"
        assert config.render_preview_bytes == 12
        assert config.hash_function()(b"x") == get_hash_function("sha3_256")(b"x")
    
    def test_from_env_bad_integer(self, monkeypatch):
        monkeypatch.setenv("HASHTREE_RENDER_PREVIEW_BYTES", "many")
        
        with pytest.raises(ConfigException, match="integer"):
            TreeConfig.from_env()
    
    def test_from_yaml(self, tmp_path):
        path = tmp_path / "hashtree.yaml"
        path.write_text("hash_algorithm: sha512\nrender_preview_bytes: 6\n")
        
        config = TreeConfig.from_yaml(path)
        
        assert config.hash_algorithm == "sha512"
        assert config.render_preview_bytes == 6
    
    def test_from_yaml_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        
        assert TreeConfig.from_yaml(path) == TreeConfig()
    
    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TreeConfig.from_yaml(tmp_path / "missing.yaml")
    
    def test_with_env_overrides(self, monkeypatch):
        base = TreeConfig(hash_algorithm="sha512", render_preview_bytes=3)
        monkeypatch.setenv("HASHTREE_HASH_ALGORITHM", "blake2b")
        
        config = base.with_env_overrides()
        
        assert config.hash_algorithm == "blake2b"
        assert config.render_preview_bytes == 3
        assert base.hash_algorithm == "sha512"
    
    def test_with_env_overrides_none_set(self):
        base = TreeConfig()
        
        assert base.with_env_overrides() is base


class TestDefaultConfig:
    """Tests for the process-wide default."""
    
    def test_get_default_is_cached(self):
        assert get_default_config() is get_default_config()
    
    def test_set_default(self):
        config = TreeConfig(hash_algorithm="sha512")
        set_default_config(config)
        
        assert get_default_config() is config
    
    def test_reset_reloads_from_env(self, monkeypatch):
        set_default_config(TreeConfig(hash_algorithm="sha512"))
        monkeypatch.setenv("HASHTREE_HASH_ALGORITHM", "sha3_512")
        
        set_default_config(None)
        
        assert get_default_config().hash_algorithm == "sha3_512"
