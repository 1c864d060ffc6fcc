"""Demonstrates how to enable and configure logging in id3kit.

id3kit logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, id3kit logging is automatically turned off.

Key concepts shown here:

- ``level``: controls the minimum log level. The custom ``SPLIT`` level
  (numeric value 15, between DEBUG and INFO) reports every split decision with
  its information gain. ``INFO`` only reports dataset loads and tree summaries.
- ``log_format``: ``"short"`` shows ``timestamp | level | function - message``;
  ``"full"`` adds the module and line number.
- Prediction failures: a test record whose attribute value has no branch in the
  tree is logged as a warning and scored as incorrect, without raising.
"""

from id3kit import DatasetConfig, DecisionTreeClassifier, enable_logging, load_dataset

config = DatasetConfig(delimiter=",", header=True, label_column=-1)

train_lines = [
    "outlook,humidity,windy,play\n",
    "sunny,high,false,no\n",
    "sunny,high,true,no\n",
    "overcast,high,false,yes\n",
    "rainy,high,false,yes\n",
    "rainy,normal,false,yes\n",
    "rainy,normal,true,no\n",
    "overcast,normal,true,yes\n",
    "sunny,normal,false,yes\n",
]
test_lines = [
    "outlook,humidity,windy,play\n",
    "sunny,normal,true,yes\n",
    "overcast,high,true,yes\n",
    "foggy,high,false,no\n",
]

# Enable logging at SPLIT level (and above) with full log format to watch the tree being built
with enable_logging(level="SPLIT", log_format="full"):
    classifier = DecisionTreeClassifier().fit(load_dataset(train_lines, config))
    report = classifier.evaluate(load_dataset(test_lines, config))

# Logging automatically disabled here
print(classifier.format())
print("\n".join(report.to_lines()))
