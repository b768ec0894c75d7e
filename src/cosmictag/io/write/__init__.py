"""Writers which store the products of the reconstruction chain."""

from .csv import *
