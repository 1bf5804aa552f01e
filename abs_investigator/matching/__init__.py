from abs_investigator.matching.candidates import TrustCandidateGenerator
from abs_investigator.matching.identifiers import generate_trust_securities

__all__ = ["TrustCandidateGenerator", "generate_trust_securities"]
