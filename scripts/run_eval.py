#!/usr/bin/env python3
"""
Test runner: POST /v1/recommend for every prompt in data/test_cases.json, check
the response invariants and save the results.
"""
import argparse
import csv
import json
import sys
from pathlib import Path
from typing import Union

import httpx

ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT / "data"
OUTPUT_DIR = ROOT / "output"

CATEGORIES = {"nature", "meditation", "breathing", "music"}
MAX_PER_CATEGORY = 3
MAX_RESULTS_LIMIT = 50
REQUIRED_KEYS = ("recommendations", "insights", "suggestions", "processingTimeMs")


def load_json(path: Path) -> Union[list, dict]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def run_one(client: httpx.Client, base_url: str, case_id: int, prompt: str) -> dict:
    resp = client.post(f"{base_url}/v1/recommend", json={"prompt": prompt}, timeout=60.0)
    resp.raise_for_status()
    result = resp.json()
    result["_case_id"] = case_id
    result["_prompt"] = prompt
    return result


def check_shape(result: dict) -> bool:
    return all(k in result for k in REQUIRED_KEYS)


def check_scores(result: dict) -> tuple[bool, list[int]]:
    scores = [v["matchScore"] for r in result["recommendations"] for v in r["videos"]]
    return all(0 <= s <= 100 for s in scores), scores


def check_categories(result: dict) -> bool:
    return all(
        r["category"] in CATEGORIES and len(r["videos"]) <= MAX_PER_CATEGORY
        for r in result["recommendations"]
    )


def check_video_count(result: dict) -> tuple[bool, int]:
    n = sum(len(r["videos"]) for r in result["recommendations"])
    return n <= MAX_RESULTS_LIMIT, n


def main():
    parser = argparse.ArgumentParser(description="Run evaluation: POST /v1/recommend with test_cases")
    parser.add_argument("--base-url", default="http://127.0.0.1:8000", help="API base URL")
    parser.add_argument("--out-jsonl", default=None, help="Output JSONL path (default: output/eval_results.jsonl)")
    parser.add_argument("--out-csv", default=None, help="Output CSV path (default: output/eval_results.csv)")
    args = parser.parse_args()

    test_cases_path = DATA_DIR / "test_cases.json"
    if not test_cases_path.exists():
        print("data/test_cases.json not found.", file=sys.stderr)
        sys.exit(1)

    test_cases = load_json(test_cases_path)
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    out_jsonl = args.out_jsonl or (OUTPUT_DIR / "eval_results.jsonl")
    out_csv = args.out_csv or (OUTPUT_DIR / "eval_results.csv")

    results = []
    summary_ok = 0
    summary_fail = 0
    checks = {"shape_ok": 0, "scores_ok": 0, "categories_ok": 0, "count_ok": 0}

    with httpx.Client() as client:
        for i, tc in enumerate(test_cases):
            case_id = i + 1
            try:
                row = run_one(client, args.base_url, case_id, tc["prompt"])
            except Exception as e:
                print(f"Case {case_id}: API error - {e}")
                summary_fail += 1
                continue

            shape_ok = check_shape(row)
            scores_ok, scores = check_scores(row) if shape_ok else (False, [])
            categories_ok = check_categories(row) if shape_ok else False
            count_ok, video_count = check_video_count(row) if shape_ok else (False, 0)

            for name, ok in (
                ("shape_ok", shape_ok),
                ("scores_ok", scores_ok),
                ("categories_ok", categories_ok),
                ("count_ok", count_ok),
            ):
                if ok:
                    checks[name] += 1

            row["_check_shape_ok"] = shape_ok
            row["_check_scores_ok"] = scores_ok
            row["_check_categories_ok"] = categories_ok
            row["_check_count_ok"] = count_ok
            row["_video_count"] = video_count
            row["_scores"] = scores
            if shape_ok and scores_ok and categories_ok and count_ok:
                summary_ok += 1
            else:
                summary_fail += 1

            results.append(row)
            print(
                f"Case {case_id}: error={bool(row.get('error'))} videos={video_count} "
                f"scores={'OK' if scores_ok else 'FAIL'} categories={'OK' if categories_ok else 'FAIL'} "
                f"time={row.get('processingTimeMs')}ms"
            )

    with open(out_jsonl, "w", encoding="utf-8") as f:
        for r in results:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")
    print(f"\nSaved: {out_jsonl}")

    with open(out_csv, "w", encoding="utf-8", newline="") as f:
        w = csv.writer(f)
        w.writerow(
            [
                "case_id",
                "error",
                "categories",
                "video_count",
                "scores",
                "shape_ok",
                "scores_ok",
                "categories_ok",
                "count_ok",
                "processing_time_ms",
            ]
        )
        for r in results:
            w.writerow(
                [
                    r["_case_id"],
                    bool(r.get("error")),
                    "|".join(c["category"] for c in r.get("recommendations", [])),
                    r["_video_count"],
                    "|".join(str(s) for s in r["_scores"]),
                    r["_check_shape_ok"],
                    r["_check_scores_ok"],
                    r["_check_categories_ok"],
                    r["_check_count_ok"],
                    r.get("processingTimeMs"),
                ]
            )
    print(f"Saved: {out_csv}")

    n = len(results)
    print("\n========== Summary ==========")
    print(f"Cases: {len(test_cases)}, successful calls: {n}, failed: {summary_fail}")
    print(f"All checks passed: {summary_ok} / {n}")
    print(f"Payload shape: {checks['shape_ok']} / {n}")
    print(f"matchScore in 0..100: {checks['scores_ok']} / {n}")
    print(f"Known categories, <= {MAX_PER_CATEGORY} per category: {checks['categories_ok']} / {n}")
    print(f"Video count <= {MAX_RESULTS_LIMIT}: {checks['count_ok']} / {n}")


if __name__ == "__main__":
    main()
