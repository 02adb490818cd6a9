# -*- coding: utf-8 -*-

import logging
import numpy as np

from .__version__ import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__author__ = "DHDE developers"

np.set_printoptions(precision=3, suppress=True)
