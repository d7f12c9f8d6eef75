"""
chaosgrab: Chaos Dataset Harvester

A utility for fetching the published index of Project Discovery's Chaos
dataset, downloading and unpacking every archive it lists, and merging
all extracted text files into a single consolidated file.
"""

__version__ = "1.0"
__author__ = "chaosgrab Project"
__description__ = "Chaos Dataset Harvester"
