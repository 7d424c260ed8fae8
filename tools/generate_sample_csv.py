from __future__ import annotations

import random
from pathlib import Path

import pandas as pd

PLANS = ["basic", "standard", "premium"]
CHANNELS = ["web", "mobile", "partner"]

NOTE_SNIPPETS = [
    "Customer reported intermittent billing issues after the last plan change",
    "Asked about annual pricing and whether unused credits roll over",
    "Escalated twice to support regarding slow dashboard load times",
    "Mentioned a competitor offer during the renewal call",
]


def main(out_path: str = "test_data/sample_churn.csv", n: int = 500, seed: int = 42) -> None:
    """
    Write a small churn-style CSV that exercises every profiler branch:
    numeric, categorical, long free text, the literal missing tokens
    ("", "NaN", "null") and an all-missing column.

    Commas are kept out of every value because the profiler does not
    understand quoting.
    """
    random.seed(seed)

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    rows = []
    for i in range(n):
        tenure = random.randint(1, 72)
        plan = random.choices(PLANS, weights=[0.5, 0.35, 0.15], k=1)[0]
        monthly = {"basic": 19.0, "standard": 39.0, "premium": 79.0}[plan] * random.uniform(0.9, 1.1)

        # Missing tokens exactly as exported by the usual suspects.
        age: object = random.randint(18, 80)
        if random.random() < 0.05:
            age = random.choice(["", "NaN", "null"])

        # Long notes make the column classify as text.
        note = " ".join(random.sample(NOTE_SNIPPETS, k=3))

        churn_prob = 0.35 if tenure < 12 else 0.1
        churned = 1 if random.random() < churn_prob else 0

        rows.append(
            {
                "customer_id": f"C{i+1:05d}",
                "tenure_months": tenure,
                "plan": plan,
                "channel": random.choice(CHANNELS),
                "monthly_charge": round(monthly, 2),
                "age": age,
                "support_notes": note,
                "referral_code": "",
                "churned": churned,
            }
        )

    df = pd.DataFrame(rows)
    df.to_csv(out, index=False)
    print(f"Wrote {len(df):,} rows to {out.resolve()}")


if __name__ == "__main__":
    main()
