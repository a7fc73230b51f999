"""
Test Secure Prompt Manager Module

This module tests the SecurePromptManager to ensure it properly prevents
prompt injection attacks and safely handles user data.

Dependencies:
- pytest: For testing framework
- app.core.secure_prompt_manager: The module being tested
- app.schemas.mock_interview: For test data models
"""

import pytest
from app.core.secure_prompt_manager import SecurePromptManager, sanitize_text, PromptTemplate
from app.schemas.mock_interview import FeedbackData, FeedbackMessage, QuestionAnswerPair

class TestSanitizeText:
    """Test the sanitize_text function for various injection attempts."""
    
    def test_sanitize_normal_text(self):
        """Test that normal text is sanitized correctly."""
        text = "Hello, this is a normal response."
        result = sanitize_text(text)
        assert result == "Hello, this is a normal response."
    
    def test_sanitize_html_injection(self):
        """Test that HTML injection is prevented."""
        text = "<script>alert('xss')</script>Hello"
        result = sanitize_text(text)
        assert "<script>" not in result
        assert "&lt;script&gt;" in result
    
    def test_sanitize_null_bytes(self):
        """Test that null bytes are removed."""
        text = "Hello\x00World"
        result = sanitize_text(text)
        assert "\x00" not in result
        assert "HelloWorld" in result
    
    def test_sanitize_control_characters(self):
        """Test that control characters are removed."""
        text = "Hello\x01\x02\x03World"
        result = sanitize_text(text)
        assert "\x01" not in result
        assert "\x02" not in result
        assert "\x03" not in result
        assert "HelloWorld" in result
    
    def test_sanitize_length_limit(self):
        """Test that text is truncated to prevent DoS."""
        long_text = "A" * 2000
        result = sanitize_text(long_text)
        assert len(result) <= 1000
    
    def test_sanitize_none_input(self):
        """Test that None input raises ValueError."""
        with pytest.raises(ValueError, match="Text cannot be None"):
            sanitize_text(None)
    
    def test_sanitize_empty_after_cleaning(self):
        """Test that empty text after sanitization raises ValueError."""
        with pytest.raises(ValueError, match="Text cannot be empty after sanitization"):
            sanitize_text("")

class TestPromptTemplate:
    """Test the PromptTemplate class."""
    
    def test_template_rendering(self):
        """Test basic template rendering."""
        template = PromptTemplate(
            template="Hello {name}, you are a {role}.",
            placeholders={"name": "User's name", "role": "User's role"}
        )
        result = template.render(name="John", role="developer")
        assert result == "Hello John, you are a developer."
    
    def test_template_missing_placeholder(self):
        """Test that missing placeholders raise ValueError."""
        template = PromptTemplate(
            template="Hello {name}, you are a {role}.",
            placeholders={"name": "User's name", "role": "User's role"}
        )
        with pytest.raises(ValueError, match="Missing required placeholders"):
            template.render(name="John")
    
    def test_template_unknown_key_ignored(self):
        """Test that unknown keys are ignored to prevent injection."""
        template = PromptTemplate(
            template="Hello {name}.",
            placeholders={"name": "User's name"}
        )
        result = template.render(name="John", malicious_key="injection")
        assert result == "Hello John."
    
    def test_template_injection_attempt(self):
        """Test that injection attempts are sanitized."""
        template = PromptTemplate(
            template="Hello {name}.",
            placeholders={"name": "User's name"}
        )
        malicious_input = "<script>alert('xss')</script>"
        result = template.render(name=malicious_input)
        assert "<script>" not in result
        assert "&lt;script&gt;" in result

class TestSecurePromptManager:
    """Test the prompts built for the mock interview services."""

    def setup_method(self):
        """Set up test fixtures."""
        self.manager = SecurePromptManager()

    def test_get_opening_question_prompt(self):
        prompt = self.manager.get_opening_question_prompt("Google", "vp")

        assert "Google senior engineering leader" in prompt
        assert "VP of Engineering" in prompt
        assert "Return only the question text" in prompt

    def test_turn_prompt_asks_for_next_question(self):
        prompt = self.manager.get_turn_system_prompt("Meta", "director", is_final_turn=False, question_index=3)

        assert "Director of Engineering" in prompt
        assert "---FEEDBACK---" in prompt
        assert "FEEDBACK_SCORE:" in prompt
        assert "---NEXT_QUESTION---" in prompt
        assert "QUESTION_INDEX: 3" in prompt
        assert "---INTERVIEW_COMPLETE---" not in prompt

    def test_final_turn_prompt_asks_for_closing(self):
        prompt = self.manager.get_turn_system_prompt("Meta", "director", is_final_turn=True)

        assert "---INTERVIEW_COMPLETE---" in prompt
        assert "OVERALL_SCORE:" in prompt
        assert "---NEXT_QUESTION---" not in prompt

    def test_regular_turn_requires_question_index(self):
        with pytest.raises(ValueError):
            self.manager.get_turn_system_prompt("Meta", "director", is_final_turn=False)

    def test_report_prompt_includes_pairs(self):
        pairs = [
            QuestionAnswerPair(
                questionIndex=1,
                question="Tell me about a reorg.",
                answer="I merged two teams & cut costs by 20%.",
                feedback=FeedbackMessage(
                    content="Good",
                    feedbackData=FeedbackData(score=8, strengths=["impact"], improvements=["brevity"]),
                ),
            ),
        ]

        prompt = self.manager.get_report_prompt("Apple", "vp", pairs, overall_score=80, final_summary=None)

        assert "Q1: Tell me about a reorg." in prompt
        # Transcript text is passed through without HTML escaping
        assert "I merged two teams & cut costs by 20%." in prompt
        assert "Existing score: 8/10" in prompt
        assert "Existing strengths: impact" in prompt
        assert "Overall score: 80/100" in prompt
        assert "Final summary from interviewer: None provided" in prompt
        assert '"executiveSummary"' in prompt
        assert "include all 1 questions" in prompt

    def test_report_prompt_without_answers(self):
        prompt = self.manager.get_report_prompt("Apple", "vp", [], overall_score=50, final_summary="Short session.")
        assert "No questions were answered." in prompt

    def test_prompt_injection_prevention(self):
        """Test that markup in the company name is escaped."""
        prompt = self.manager.get_opening_question_prompt("<injection>Acme</injection>", "vp")

        assert "<injection>" not in prompt
        assert "&lt;injection&gt;" in prompt
        assert "Acme" in prompt

class TestSecurityFeatures:
    """Test specific security features and edge cases."""
    
    def test_unicode_normalization(self):
        """Test that unicode characters are properly normalized."""
        text = "Hello\u2028World\u2029"  # Unicode line/paragraph separators
        result = sanitize_text(text)
        # Note: The current sanitize_text function doesn't remove \u2028 and \u2029
        # This is acceptable as they are not control characters in the current regex
        assert "Hello" in result
        assert "World" in result
    
    def test_whitespace_handling(self):
        """Test that whitespace is properly handled."""
        text = "  Hello  World  "
        result = sanitize_text(text)
        assert result == "Hello  World"  # Leading/trailing stripped, internal preserved
    
    def test_special_characters(self):
        """Test that special characters are properly escaped."""
        text = "Hello & World < 5 > 3"
        result = sanitize_text(text)
        assert "&amp;" in result
        assert "&lt;" in result
        assert "&gt;" in result
    
    def test_template_placeholder_validation(self):
        """Test that template placeholders are properly validated."""
        template = PromptTemplate(
            template="Hello {name}.",
            placeholders={"name": "User's name"}
        )
        
        # Test with extra data (should be ignored)
        result = template.render(name="John", extra="data")
        assert result == "Hello John."
        
        # Test with missing data (should raise error)
        with pytest.raises(ValueError):
            template.render(extra="data")

if __name__ == "__main__":
    pytest.main([__file__]) 
