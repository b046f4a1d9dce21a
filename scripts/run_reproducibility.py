#!/usr/bin/env python3
"""
Reproducibility check: call the same test case N times and compare the
recommended video ids / insights across calls.
- Extraction, planning and ranking are deterministic, so differences come from
  the catalog returning different search results between calls.
"""
import argparse
import json
import sys
from collections import Counter
from pathlib import Path

import httpx

ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT / "data"
OUTPUT_DIR = ROOT / "output"


def load_json(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def run_one(client: httpx.Client, base_url: str, prompt: str) -> dict:
    resp = client.post(f"{base_url}/v1/recommend", json={"prompt": prompt}, timeout=60.0)
    resp.raise_for_status()
    return resp.json()


def video_ids(response: dict) -> tuple:
    return tuple(v["videoId"] for r in response.get("recommendations", []) for v in r["videos"])


def main():
    parser = argparse.ArgumentParser(description="Reproducibility: call each case N times and report agreement")
    parser.add_argument("--base-url", default="http://127.0.0.1:8000", help="API base URL")
    parser.add_argument("--repeat", "-n", type=int, default=5, help="Calls per case (default 5)")
    parser.add_argument("--case", "-c", type=int, default=None, help="Only this case (1-based). Default: all")
    parser.add_argument("--out", default=None, help="Optional JSON output path")
    args = parser.parse_args()

    test_cases_path = DATA_DIR / "test_cases.json"
    if not test_cases_path.exists():
        print("data/test_cases.json not found.", file=sys.stderr)
        sys.exit(1)

    test_cases = load_json(test_cases_path)

    if args.case is not None:
        idx = args.case - 1
        if idx < 0 or idx >= len(test_cases):
            print(f"--case must be between 1 and {len(test_cases)}.", file=sys.stderr)
            sys.exit(1)
        test_cases = [test_cases[idx]]
        case_indices = [args.case]
    else:
        case_indices = list(range(1, len(test_cases) + 1))

    n = args.repeat
    all_results = []

    with httpx.Client() as client:
        for case_idx, tc in zip(case_indices, test_cases):
            responses = []
            for _ in range(n):
                try:
                    responses.append(run_one(client, args.base_url, tc["prompt"]))
                except Exception as e:
                    print(f"Case {case_idx} call failed: {e}", file=sys.stderr)
                    responses.append({"recommendations": [], "insights": None})

            ids_counter = Counter(video_ids(r) for r in responses)
            insights_counter = Counter(r.get("insights") or "" for r in responses)
            same_ids_count = ids_counter.most_common(1)[0][1] if ids_counter else 0
            same_insights_count = insights_counter.most_common(1)[0][1] if insights_counter else 0

            summary = {
                "case_id": case_idx,
                "repeat": n,
                "same_video_ids_count": same_ids_count,
                "same_insights_count": same_insights_count,
                "distinct_video_id_lists": len(ids_counter),
            }
            all_results.append(summary)

            print(f"Case {case_idx}: {n} calls")
            print(f"  same video ids: {same_ids_count}/{n}")
            print(f"  same insights: {same_insights_count}/{n}")
            print()

    if args.out:
        OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        out_path = Path(args.out)
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump({"repeats": n, "results": all_results}, f, ensure_ascii=False, indent=2)
        print(f"Saved: {out_path}")

    total = len(all_results)
    perfect_ids = sum(1 for r in all_results if r["same_video_ids_count"] == n)
    perfect_insights = sum(1 for r in all_results if r["same_insights_count"] == n)
    print("========== Reproducibility summary ==========")
    print(f"Cases: {total}, calls per case: {n}")
    print(f"Cases with identical video ids every call: {perfect_ids}/{total}")
    print(f"Cases with identical insights every call: {perfect_insights}/{total}")


if __name__ == "__main__":
    main()
