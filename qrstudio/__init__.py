# -*- coding: utf-8 -*-
"""
QR Studio - Core Module

This package turns text into colored QR codes: a from-scratch QR encoder
(segmentation, Reed-Solomon, matrix building and masking), a two-color
renderer and a debounced generation controller for interactive front ends.

Modules:
    segmenter: Mode classification and bit packing
    encoder: Version selection, Reed-Solomon and interleaving
    functional_areas: QR code function pattern placement
    penalties: Mask pattern evaluation algorithms
    matrix: Data placement, masking and the final symbol
    renderer: Raster and SVG rendering with custom colors
    pipeline: One-call text -> surface generation
    controller: Debounced, cancellable generation state machine
"""

__version__ = "1.0.0"
__author__ = "QR Studio Team"

from .errors import QRStudioError, EmptyInputError, CapacityExceededError, EncodingInvariantError
from .tables import ECLevel
from .segmenter import Mode, Segment, segment
from .encoder import EncodedData, encode
from .matrix import QRSymbol, build, evaluate_all_masks
from .functional_areas import compute_alignment_centers
from .penalties import compute_mask_penalty
from .renderer import RenderedSurface, render, render_svg
from .config import QRConfig
from .pipeline import generate, make_symbol
from .controller import GenerationController, GenerationResult, GenerationState

__all__ = [
    'QRStudioError',
    'EmptyInputError',
    'CapacityExceededError',
    'EncodingInvariantError',
    'ECLevel',
    'Mode',
    'Segment',
    'segment',
    'EncodedData',
    'encode',
    'QRSymbol',
    'build',
    'evaluate_all_masks',
    'compute_alignment_centers',
    'compute_mask_penalty',
    'RenderedSurface',
    'render',
    'render_svg',
    'QRConfig',
    'generate',
    'make_symbol',
    'GenerationController',
    'GenerationResult',
    'GenerationState',
]
