import numpy as np
import pytest

from eeg_arwt.config import FeatureConfig, load_config
from eeg_arwt.errors import ConfigurationError

class TestFeatureConfig:

    def test_defaults_are_valid(self):
        cfg = FeatureConfig().validate()
        assert cfg.wt_enable == [True, False, False, True]

    @pytest.mark.parametrize("options", [
        {"ar_order": 0},
        {"ar_order": -3},
        {"ar_order": "4"},
        {"wt_levels": 0},
        {"wt_kernel": "morl"},
        {"n_jobs": 0},
    ])
    def test_invalid(self, options):
        with pytest.raises(ConfigurationError):
            FeatureConfig(**options).validate()

    @pytest.mark.parametrize("options", [
        {"ar_order": np.int64(2)},
        {"wt_levels": np.int32(3)},
        {"n_jobs": np.int64(2)},
    ])
    def test_numpy_integers_accepted(self, options):
        FeatureConfig(**options).validate()

    @pytest.mark.parametrize("options", [{"ar_order": np.int64(0)}, {"wt_levels": np.int64(-1)}])
    def test_numpy_integers_still_checked(self, options):
        with pytest.raises(ConfigurationError):
            FeatureConfig(**options).validate()

    def test_disabled_family_is_not_checked(self):
        FeatureConfig(ar_enabled=False, ar_order=0, wt_enabled=False, wt_kernel="?").validate()

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ConfigurationError, match="wt_enable_kurtosis"):
            FeatureConfig.from_dict({"ar_order": 3, "wt_enable_kurtosis": True})

    def test_from_dict_validates(self):
        with pytest.raises(ConfigurationError):
            FeatureConfig.from_dict({"wt_levels": -1})

    def test_to_dict(self):
        d = FeatureConfig(ar_order=7).to_dict()
        assert d["ar_order"] == 7
        assert FeatureConfig.from_dict(d) == FeatureConfig(ar_order=7)

class TestLoadConfig:

    def test_features_split_from_driver_keys(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text(
            "eeg_dir: data\n"
            "segment_seconds: 2\n"
            "features:\n"
            "  ar_order: 6\n"
            "  wt_kernel: sym4\n"
            "  wt_enable_rms: true\n"
        )
        features, rest = load_config(str(path))
        assert features.ar_order == 6
        assert features.wt_kernel == "sym4"
        assert features.wt_enable == [True, False, True, True]
        assert rest == {"eeg_dir": "data", "segment_seconds": 2}

    def test_missing_features_uses_defaults(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("eeg_dir: data\n")
        features, _ = load_config(str(path))
        assert features == FeatureConfig()

    def test_bad_option_in_file(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("features:\n  wt_levels: 0\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))
