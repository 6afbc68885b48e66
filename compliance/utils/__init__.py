# Calculation utilities package
