"""Readers which load entries of reconstruction products."""

from .csv import *
