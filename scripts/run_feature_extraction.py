import argparse
import os

from eeg_arwt.config import load_config
from eeg_arwt.data import load_segments, segments_to_tensor
from eeg_arwt.features import build_feature_frame
from eeg_arwt.utils import ensure_dir

def main(cfg_path: str, out_name: str):
    features_cfg, cfg = load_config(cfg_path)

    segment_length = int(cfg["sampling_rate"] * cfg["segment_seconds"])
    segments, recording_ids = load_segments(
        eeg_dir=cfg["eeg_dir"],
        segment_length=segment_length,
        channels=cfg.get("channels"),
    )
    print("[Data] segments:", len(segments), "recordings:", len(set(recording_ids)))

    signals = segments_to_tensor(segments)
    print("[Data] signal tensor (sample, channel, trial):", signals.shape)

    channel_names = [str(c) for c in segments[0].columns]
    df = build_feature_frame(signals, features_cfg, channel_names=channel_names, verbose=True)
    df.insert(0, "recording_id", recording_ids)

    ensure_dir(cfg["output_dir"])
    out_csv = os.path.join(cfg["output_dir"], out_name)
    df.to_csv(out_csv, index=False)
    print(f"[Saved] features -> {out_csv}")

if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", required=True)
    ap.add_argument("--out", default="features.csv")
    args = ap.parse_args()

    main(args.config, args.out)
