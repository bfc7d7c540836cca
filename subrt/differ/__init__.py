"""Reduced runtime representation and the diffing and analysis built on it."""