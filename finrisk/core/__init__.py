"""Core computational engines: dataset, ratio engine and risk evaluator."""
