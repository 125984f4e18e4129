# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import unittest

import torch
from blockgibbs.inference.monte_carlo_samples import GibbsSamples
from blockgibbs.inference.sampler import Sample
from blockgibbs.model.variable import Variable


class GibbsSamplesTest(unittest.TestCase):
    def setUp(self):
        self.x = Variable("x", [0, 1, 2])
        self.y = Variable("y", ["a", "b"])
        x, y = self.x, self.y
        self.samples = GibbsSamples(
            [
                [
                    Sample(True, {x: 0, y: "a"}),
                    Sample(True, {x: 2, y: "b"}),
                    Sample(False, {y: "b"}),
                ],
                [
                    Sample(True, {x: 2, y: "a"}),
                    Sample(True, {x: 1, y: "a"}),
                    Sample(False, {y: "a"}),
                ],
            ],
            [x, y],
        )

    def test_counts(self):
        self.assertEqual(self.samples.num_chains, 2)
        self.assertEqual(self.samples.num_samples, 6)
        self.assertEqual(self.samples.num_valid, 4)
        self.assertEqual(self.samples.num_invalid, 2)
        self.assertEqual(len(self.samples), 2)
        self.assertEqual(list(self.samples), [self.x, self.y])

    def test_values_skip_invalid_samples(self):
        self.assertEqual(self.samples[self.x], [0, 2, 2, 1])
        self.assertEqual(self.samples.get_values(self.y), ["a", "b", "a", "a"])

    def test_statistics(self):
        self.assertEqual(
            self.samples.distribution(self.x), {0: 0.25, 2: 0.5, 1: 0.25}
        )
        self.assertAlmostEqual(self.samples.probability(self.y, "a"), 0.75)
        self.assertAlmostEqual(self.samples.probability(self.x, lambda v: v > 0), 0.75)
        self.assertAlmostEqual(self.samples.expectation(self.x, float), 1.25)
        self.assertTrue(
            torch.equal(self.samples.to_tensor(self.x), torch.tensor([0, 2, 2, 1]))
        )

    def test_get_chain(self):
        chain = self.samples.get_chain(1)
        self.assertEqual(chain.num_chains, 1)
        self.assertEqual(chain[self.x], [2, 1])
        with self.assertRaises(ValueError):
            chain.get_chain(0)
        with self.assertRaises(IndexError):
            self.samples.get_chain(2)
        with self.assertRaises(IndexError):
            self.samples.get_chain(-1)

    def test_unknown_target(self):
        with self.assertRaises(KeyError):
            self.samples[Variable("z", [0])]

    def test_no_valid_samples(self):
        samples = GibbsSamples([[Sample(False, {})]], [self.x])
        self.assertEqual(samples[self.x], [])
        with self.assertRaises(ValueError):
            samples.probability(self.x, 0)

    def test_str(self):
        self.assertEqual(
            str(self.samples),
            "GibbsSamples(2 chains, 4 valid and 2 invalid samples)",
        )
