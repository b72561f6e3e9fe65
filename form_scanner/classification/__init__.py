"""
Classification Module for the Form Scanner.

Keyword and pattern scoring that decides which extractor reads a text.
"""

from .classifier import DocumentClassifier, ClassifierRules, ClassificationScores

__all__ = ['DocumentClassifier', 'ClassifierRules', 'ClassificationScores']
