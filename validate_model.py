"""
Model validation and sanity checks
"""
import sys

import numpy as np
from sklearn.metrics import r2_score, mean_absolute_error, mean_absolute_percentage_error

from price_engine import PropertyFeatures, calculate_emi, format_inr, format_inr_short, predict, train_model
from price_engine.model import evaluate_model, get_feature_importance
from price_engine.preprocessing import TARGET_COLUMN, generate_training_data

SEED = int(sys.argv[1]) if len(sys.argv) > 1 else 42

print("=" * 80)
print("MODEL VALIDATION & SANITY CHECKS")
print("=" * 80)
print(f"\nSeed: {SEED}")

# Train on one synthetic draw, hold out a second one
model = train_model(n_samples=2000, random_seed=SEED, verbose=True)
train_df = generate_training_data(2000, random_seed=SEED)
test_df = generate_training_data(1000, random_seed=SEED + 1)

# CHECK 1: Baseline
print("\n" + "=" * 80)
print("CHECK 1: BASELINE MODEL")
print("=" * 80)

y_test = test_df[TARGET_COLUMN].values
global_median = train_df[TARGET_COLUMN].median()
baseline = np.full(len(y_test), global_median)
r2_base = r2_score(y_test, baseline)
mae_base = mean_absolute_error(y_test, baseline)
mape_base = mean_absolute_percentage_error(y_test, baseline) * 100

print(f"\nGlobal Median Baseline:")
print(f"   Median: {format_inr(global_median)}")
print(f"   R²: {r2_base:.4f}")
print(f"   MAE: {format_inr(mae_base)}")
print(f"   MAPE: {mape_base:.2f}%")

# CHECK 2: Regression on train and held-out sets
print("\n" + "=" * 80)
print("CHECK 2: REGRESSION METRICS")
print("=" * 80)

evaluate_model(model, train_df, "Train")
test_metrics = evaluate_model(model, test_df, "Held-out")

print("\nFeature importance (|weight × std|):")
print(get_feature_importance(model, train_df).to_string(index=False))

# CHECK 3: Example scenarios
print("\n" + "=" * 80)
print("CHECK 3: EXAMPLE SCENARIOS")
print("=" * 80)

scenarios = {
    "Pune apartment": PropertyFeatures(
        area=1200, bedrooms=2, bathrooms=2, property_type="apartment", location="pune",
        age=5, floor=3, furnishing="unfurnished", amenities=[]
    ),
    "Mumbai penthouse": PropertyFeatures(
        area=3200, bedrooms=4, bathrooms=3, property_type="penthouse", location="mumbai",
        age=2, floor=18, furnishing="fully-furnished", amenities=["gym", "swimming-pool", "parking"]
    ),
    "Unknown city": PropertyFeatures(
        area=900, bedrooms=1, bathrooms=1, property_type="studio", location="atlantis",
        age=25, floor=1, furnishing="semi-furnished", amenities=["security"]
    ),
}

problems = []
for name, features in scenarios.items():
    result = predict(model, features)
    emi = calculate_emi(result.price)
    print(f"\n{name}:")
    print(f"   Price: {format_inr(result.price)} ({format_inr_short(result.price)})")
    print(f"   Range: {format_inr_short(result.price_range.min)} - {format_inr_short(result.price_range.max)}")
    print(f"   Confidence: {result.confidence * 100:.0f}% - {result.investment_recommendation}")
    print(f"   EMI (20% down, 8.5%, 20y): {format_inr(emi.emi)}")
    for factor, value in result.chart_breakdown().items():
        print(f"     {factor:<32} {'+' if value >= 0 else ''}{format_inr_short(value)}")

    if not result.price_range.min <= result.price <= result.price_range.max:
        problems.append(f"{name}: price outside its range")
    if not 0.5 <= result.confidence <= 0.95:
        problems.append(f"{name}: confidence out of bounds")

print("\n" + "=" * 80)
print("SUMMARY")
print("=" * 80)
print(f"\nBaseline:   R²={r2_base:.4f}, MAE={format_inr(mae_base)}")
print(f"Regression: R²={test_metrics['r2']:.4f}, MAE={format_inr(test_metrics['mae'])} (held-out)")

if problems:
    print("\n❌ Sanity checks failed:")
    for problem in problems:
        print(f"   - {problem}")
    sys.exit(1)

if test_metrics['r2'] > 0.5:
    print("\n✓ Model performance is good")
elif test_metrics['r2'] > 0.3:
    print("\n⚠️  Model performance is mediocre - room for improvement")
else:
    print("\n❌ Model performance is poor - needs investigation")
