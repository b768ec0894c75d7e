"""Cosmic tagging post-processors."""

from .pca_tagger import *
