"""
Genotyping chip detection from PLINK variant lists.

Matches a PLINK .bim file against a directory of Will Rayner strand archives
and ranks the archives by how well their strand file describes the dataset.
"""

__version__ = "1.0.0"
__author__ = "Data Tecnica International"
