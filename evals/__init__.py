"""
Regression evals for the complaint rewrite safety gate.

Fixtures live in evals/fixtures/eval_cases/ (one JSON case per file) and are
paired with recorded provider outputs in evals/fixtures/provider_outputs_v1.jsonl.

Run evals: pytest evals/ -v
"""
