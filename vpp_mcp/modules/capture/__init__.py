"""
Capture Module - Black Box Interface

Purpose: Timed trace, pcap and dispatch captures on a VPP dataplane
Interface: CaptureOrchestrator.capture() returning a ToolResponse
Hidden: Stage sequencing, per-pod serialization, cleanup on failure
"""

from .orchestrator import CapturePlan, CaptureOrchestrator, CaptureStage

__all__ = ["CaptureOrchestrator", "CapturePlan", "CaptureStage"]
